"""
Tokenizes a Markdown file and prints it as HTML or as a JSON token tree.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import OUTPUT_FORMATS, ConfigError, build_config
from .constants import MARKDOWN_EXTENSIONS
from .parser import ParseFileError, parse_file
from .renderer import render_html

__all__ = ["cli"]


def _require_markdown(ctx: click.Context, param: click.Parameter, value: Path) -> Path:
    if value.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise click.BadParameter(
            f"{value} is not a Markdown file (expected {', '.join(MARKDOWN_EXTENSIONS)})."
        )
    return value


@click.command()
@click.version_option(package_name="md-tokens")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (html or json)",
)
@click.option("--max-depth", type=int, help="Maximum container nesting depth")
@click.option("--no-escape", is_flag=True, default=False, help="Do not HTML-escape plain text")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log parser decisions")
@click.argument(
    "filepath",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True, path_type=Path),
    callback=_require_markdown,
)
def cli(
    filepath: Path,
    output_format: str | None = None,
    max_depth: int | None = None,
    no_escape: bool = False,
    verbose: bool = False,
):
    """
    Entry point for rendering a Markdown file.

    Args:
        filepath: Path to the Markdown file to process.
        output_format: Override for the configured output format.
        max_depth: Override for the maximum nesting depth.
        no_escape: Disable HTML escaping of plain text.
        verbose: Emit DEBUG logs on stderr.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If reading or parsing the file fails.

    Examples:
        md-tokens README.md --format json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = build_config(
            filepath.parent,
            output_format=output_format,
            max_depth=max_depth,
            escape_html=False if no_escape else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        tokens = parse_file(filepath, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if not tokens:
        click.echo(f"Warning: {filepath} contains no text to tokenize.", err=True)

    if config.output_format == "json":
        click.echo(json.dumps([token.to_dict() for token in tokens], indent=2))
    else:
        click.echo(render_html(tokens, escape=config.escape_html), nl=False)


if __name__ == "__main__":
    cli()
