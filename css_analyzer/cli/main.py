"""Click-based CLI for the CSS analyzer."""

import sys
from functools import cmp_to_key
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..analyzer_logging import LogCategory, get_category_logger, setup_logging
from ..config import ConfigError, load_config
from ..engine import analyze as analyze_css
from ..heuristics import Specificity, calculate_specificity, compare_specificity
from ..parser import Node, NodeType, parse
from ..report import SECTIONS
from .errors import (
    CLIError,
    ErrorCategory,
    file_decode_error,
    file_not_found_error,
    invalid_config_error,
    selector_error,
    unknown_section_error,
)
from .output import report_error

logger = get_category_logger(LogCategory.CLI)


def common_options(f: Any) -> Any:
    """Logging and configuration options shared by commands."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file path",
    )(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default=None,
        help="Log output format",
    )(f)
    return f


def read_stylesheet(file: str, encoding: str) -> str:
    """Read a stylesheet from a path, or from stdin for '-'.

    Raises:
        CLIError: If the file is missing or cannot be decoded.
    """
    if file == "-":
        with click.open_file("-") as stream:
            return stream.read()

    path = Path(file)
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise file_not_found_error(path) from e
    except OSError as e:
        raise CLIError(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Cannot read {path}: {e.strerror}",
            suggestion="Check the file permissions",
            details={"path": str(path)},
        ) from e

    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise file_decode_error(path, encoding) from e


def selectors_of(text: str) -> list[Node]:
    """Parse a selector list given on the command line."""
    tree = parse(f"{text}{{}}")
    rules = [node for node in tree.children if node.type is NodeType.RULE]
    if len(rules) != 1 or not rules[0].prelude.children:
        raise selector_error(text)
    return rules[0].prelude.children


@click.group()
@click.version_option(version=__version__, prog_name="css-analyzer")
def cli() -> None:
    """CSS Analyzer - metrics, browser hacks and complexity of stylesheets."""


@cli.command()
@click.argument("file", default="-", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--section",
    "-s",
    "sections",
    multiple=True,
    help=f"Report section to print, repeatable ({', '.join(SECTIONS)})",
)
@click.option("--indent", type=int, default=None, help="JSON indentation (default 2)")
@common_options
def analyze(
    file: str,
    sections: tuple[str, ...],
    indent: int | None,
    verbose: bool,
    quiet: bool,
    config_path: Path | None,
    log_format: str | None,
) -> None:
    """Analyze a stylesheet and print the report as JSON.

    Reads FILE, or stdin when FILE is '-' or omitted.

    Examples:
        css-analyzer analyze styles.css
        cat styles.css | css-analyzer analyze --section selectors
    """
    try:
        if quiet and verbose:
            raise CLIError(
                category=ErrorCategory.VALIDATION,
                message="--quiet and --verbose are mutually exclusive",
                exit_code=2,
            )
        for section in sections:
            if section not in SECTIONS:
                raise unknown_section_error(section, SECTIONS)

        try:
            config = load_config(
                config_path,
                log_format=log_format,
                json_indent=indent,
                sections=list(sections) or None,
            )
        except ConfigError as e:
            raise invalid_config_error(e.message, e.config_file) from e

        setup_logging(
            level=config.log_level,
            quiet=quiet,
            verbose=verbose,
            log_file=config.log_file,
            log_format=config.log_format,
        )

        css = read_stylesheet(file, config.encoding)
        logger.info(f"Analyzing {file} ({len(css)} chars)", extra={"file_path": file})
        report = analyze_css(css)
        click.echo(report.to_json(indent=config.json_indent, sections=config.sections))
    except CLIError as e:
        report_error(e)


@cli.command()
@click.argument("selectors", nargs=-1, required=True)
def specificity(selectors: tuple[str, ...]) -> None:
    """Print the specificity of each SELECTOR, then the lowest and highest.

    Examples:
        css-analyzer specificity "#nav a:hover" ".btn, .btn:is(.primary)"
    """
    try:
        results: list[Specificity] = []
        for text in selectors:
            for selector in selectors_of(text):
                value = calculate_specificity(selector)
                results.append(value)
                rendered = text[selector.start : selector.end]
                click.echo(f"{_format(value)}\t{rendered}")
    except CLIError as e:
        report_error(e)

    # compare_specificity sorts the highest first
    ordered = sorted(results, key=cmp_to_key(compare_specificity))
    click.echo(f"min\t{_format(ordered[-1])}")
    click.echo(f"max\t{_format(ordered[0])}")


def _format(value: Specificity) -> str:
    return ",".join(str(part) for part in value)


def main() -> None:
    """Main entry point using Click CLI."""
    cli()


if __name__ == "__main__":
    sys.exit(main())
