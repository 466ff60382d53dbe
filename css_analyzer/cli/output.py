"""Terminal output helpers for the CLI.

Follows the NO_COLOR standard: https://no-color.org/
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

import click

from .errors import CLIError


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit flag (if passed)
    2. NO_COLOR environment variable
    3. FORCE_COLOR environment variable
    4. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: True forces colors, False disables them, None
            auto-detects.
        stream: Output stream to check for TTY. Defaults to stderr.

    Returns:
        True if colors should be used, False otherwise.
    """
    if explicit_flag is not None:
        return explicit_flag

    # Any value, including empty, means "no color"
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stderr
    if hasattr(stream, "isatty") and not stream.isatty():
        return False
    return True


def report_error(error: CLIError) -> None:
    """Print a structured error to stderr and exit with its exit code."""
    click.echo(error.format(use_color=should_use_color()), err=True)
    sys.exit(error.exit_code)
