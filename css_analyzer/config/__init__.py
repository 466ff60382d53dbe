"""Analyzer configuration.

Configuration Precedence (highest to lowest):
1. Explicit overrides (command line options)
2. Environment variables (CSS_ANALYZER_*)
3. Config file (css-analyzer.config.json)
4. Defaults
"""

from .config_loader import DEFAULT_CONFIG_FILE, ENV_VARS, ConfigError, load_config
from .models import AnalyzerConfig

__all__ = [
    "AnalyzerConfig",
    "ConfigError",
    "DEFAULT_CONFIG_FILE",
    "ENV_VARS",
    "load_config",
]
