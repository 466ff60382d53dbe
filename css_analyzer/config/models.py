"""Configuration model with validation."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ..report import SECTIONS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnalyzerConfig(BaseModel):
    """Settings for the command line analyzer."""

    # Logging
    log_level: str = Field(
        default="WARNING", description="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_format: str = Field(default="text", description="Log format: 'text' or 'json'")
    log_file: Path | None = Field(default=None, description="Path to log file")

    # Output
    json_indent: int | None = Field(
        default=2, description="JSON indentation, None for compact output"
    )
    sections: list[str] = Field(
        default_factory=list, description="Report sections to emit, empty for all"
    )

    # Input
    encoding: str = Field(default="utf-8", description="Stylesheet file encoding")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        log_format = v.strip().lower()
        if log_format not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return log_format

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("JSON indent cannot be negative")
        return v

    @field_validator("sections")
    @classmethod
    def validate_sections(cls, v: list[str]) -> list[str]:
        unknown = [section for section in v if section not in SECTIONS]
        if unknown:
            raise ValueError(
                f"Unknown report section(s): {', '.join(unknown)}. "
                f"Valid sections: {', '.join(SECTIONS)}"
            )
        return v
