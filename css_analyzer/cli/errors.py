"""Structured error types for the CLI with recovery suggestions.

Errors carry a category and an actionable suggestion, and are printed by
the command line entry point instead of a traceback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(Enum):
    """Categories of CLI errors for organization and handling."""

    CONFIGURATION = "configuration"  # Invalid config file or values
    FILE_SYSTEM = "file_system"  # Missing or unreadable stylesheets
    VALIDATION = "validation"  # Invalid arguments
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class CLIError(Exception):
    """Base class for structured CLI errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]
        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")
        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


def file_not_found_error(path: str | Path) -> CLIError:
    """Create an error for a stylesheet that does not exist."""
    return CLIError(
        category=ErrorCategory.FILE_SYSTEM,
        message=f"Stylesheet not found: {path}",
        suggestion="Check the path, or pass '-' to read the stylesheet from stdin",
        details={"path": str(path)},
    )


def file_decode_error(path: str | Path, encoding: str) -> CLIError:
    """Create an error for a stylesheet that cannot be decoded."""
    return CLIError(
        category=ErrorCategory.FILE_SYSTEM,
        message=f"Cannot decode {path} as {encoding}",
        suggestion="Set the 'encoding' option in css-analyzer.config.json",
        details={"path": str(path), "encoding": encoding},
    )


def invalid_config_error(message: str, config_file: str | Path | None = None) -> CLIError:
    """Create an error for configuration that does not validate."""
    return CLIError(
        category=ErrorCategory.CONFIGURATION,
        message=message,
        suggestion="Check your configuration file syntax and values",
        details={"config_file": str(config_file)} if config_file else None,
    )


def unknown_section_error(section: str, valid: tuple[str, ...]) -> CLIError:
    """Create an error for a report section name that does not exist."""
    return CLIError(
        category=ErrorCategory.VALIDATION,
        message=f"Unknown report section: {section}",
        suggestion=f"Use one of: {', '.join(valid)}",
        details={"section": section},
        exit_code=2,
    )


def selector_error(selector: str) -> CLIError:
    """Create an error for a selector argument without any selector in it."""
    return CLIError(
        category=ErrorCategory.VALIDATION,
        message=f"Not a selector: {selector!r}",
        suggestion="Quote selectors containing spaces or shell characters",
        details={"selector": selector},
        exit_code=2,
    )
