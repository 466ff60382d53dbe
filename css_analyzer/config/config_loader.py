"""Configuration loading with precedence rules."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..analyzer_logging import get_logger
from .models import AnalyzerConfig

logger = get_logger()

DEFAULT_CONFIG_FILE = "css-analyzer.config.json"

# Environment variable -> config field
ENV_VARS = {
    "CSS_ANALYZER_LOG_LEVEL": "log_level",
    "CSS_ANALYZER_LOG_FORMAT": "log_format",
    "CSS_ANALYZER_LOG_FILE": "log_file",
}


class ConfigError(Exception):
    """Raised when configuration cannot be read or does not validate."""

    def __init__(self, message: str, config_file: Path | None = None):
        super().__init__(message)
        self.message = message
        self.config_file = config_file


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", config_file=path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", config_file=path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object", config_file=path)
    return data


def load_config(config_file: Path | None = None, **overrides: Any) -> AnalyzerConfig:
    """Load configuration from all sources.

    Precedence (highest to lowest):
    1. Explicit overrides (None values are ignored)
    2. Environment variables
    3. Config file (explicit path or css-analyzer.config.json in the cwd)
    4. Defaults

    Args:
        config_file: Optional path to a JSON config file.
        **overrides: Explicit configuration overrides, e.g. from the CLI.

    Returns:
        Validated AnalyzerConfig.

    Raises:
        ConfigError: If the config file is unreadable or a value is invalid.
    """
    config_dict: dict[str, Any] = {}

    # 1. Config file
    if config_file is None:
        default_file = Path.cwd() / DEFAULT_CONFIG_FILE
        config_file = default_file if default_file.exists() else None
    if config_file is not None:
        file_settings = _read_config_file(Path(config_file))
        config_dict.update(file_settings)
        logger.debug(f"Loaded {len(file_settings)} settings from {config_file}")

    # 2. Environment variables
    env_count = 0
    for env_var, key in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            config_dict[key] = value
            env_count += 1
    if env_count > 0:
        logger.debug(f"Applied {env_count} environment variables")

    # 3. Explicit overrides
    explicit = {key: value for key, value in overrides.items() if value is not None}
    config_dict.update(explicit)
    if explicit:
        logger.debug(f"Applied {len(explicit)} explicit overrides")

    try:
        return AnalyzerConfig(**config_dict)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(
            f"Invalid configuration: {problems}", config_file=config_file
        ) from e
