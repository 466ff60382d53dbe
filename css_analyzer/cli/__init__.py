"""Command line interface for the CSS analyzer.

Modules:
    main: click command group (analyze, specificity)
    errors: Structured error types with recovery suggestions
    output: Color detection and error printing
"""

from .errors import (
    CLIError,
    ErrorCategory,
    file_decode_error,
    file_not_found_error,
    invalid_config_error,
    selector_error,
    unknown_section_error,
)
from .main import cli, main
from .output import report_error, should_use_color

__all__ = [
    # Entry points
    "cli",
    "main",
    # Errors
    "CLIError",
    "ErrorCategory",
    "file_decode_error",
    "file_not_found_error",
    "invalid_config_error",
    "selector_error",
    "unknown_section_error",
    # Output
    "report_error",
    "should_use_color",
]
