"""
Command line interface for the Atlassian wiki markup converter
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from core.config import SUPPORTED_FLAVORS, get_wiki_config
from core.errors import ConfigurationError, ValidationError, WikiMarkupError, format_error

# stdout carries the converted markup, so diagnostics go to stderr
console = Console(stderr=True)


def setup_logging(level: str = "INFO"):
    """Setup logging with rich handler"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def read_markdown(input_file: str | None, edit: bool) -> str:
    """
    Collect the Markdown source from a file, stdin or the user's editor.

    Args:
        input_file: Path to read, or None for stdin
        edit: Open $EDITOR, pre-filled with the file contents when a file is given

    Returns:
        The Markdown text

    Raises:
        ValidationError: If the input is not valid UTF-8
        click.Abort: If the editor was closed without saving
    """
    if input_file or not edit:
        source = input_file or "-"
        try:
            with click.open_file(source, encoding="utf-8") as f:
                markdown = f.read()
        except UnicodeDecodeError as e:
            name = "stdin" if source == "-" else source
            raise ValidationError(f"{name} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    else:
        markdown = ""

    if edit:
        edited = click.edit(markdown, extension=".md")
        if edited is None:
            console.print("[yellow]Editor closed without saving; nothing to convert[/yellow]")
            raise click.Abort()
        markdown = edited

    return markdown


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, verbose):
    """atlassian-wiki: Convert Markdown to Jira and Confluence wiki markup"""
    ctx.ensure_object(dict)

    try:
        config = get_wiki_config()
    except ConfigurationError as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)

    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj["config"] = config
    if verbose:
        console.print(f"[dim]Configuration: {config.get_environment_summary()}[/dim]")


@cli.command("convert")
@click.argument("input_file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.argument("output_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--flavor",
    "-f",
    type=click.Choice(SUPPORTED_FLAVORS, case_sensitive=False),
    help="Markup flavor (default: ATLASSIAN_WIKI_FLAVOR or jira)",
)
@click.option(
    "--heading-shift",
    "-m",
    type=int,
    help="Number added to every heading level; headings shifted to 0 or below are dropped",
)
@click.option("--toc/--no-toc", default=None, help="Start the output with the {toc} macro")
@click.option("--edit", "-e", is_flag=True, help="Compose or edit the Markdown in $EDITOR first")
@click.pass_context
def convert(ctx, input_file, output_file, flavor, heading_shift, toc, edit):
    """Convert INPUT_FILE (default: stdin) and write the markup to OUTPUT_FILE (default: stdout)."""
    from wiki.converter import convert_markdown

    config = ctx.obj["config"]
    flavor = flavor or config.flavor
    heading_shift = config.heading_shift if heading_shift is None else heading_shift
    include_toc = config.include_toc if toc is None else toc

    try:
        markdown = read_markdown(input_file, edit)
        markup = convert_markdown(markdown, flavor=flavor, heading_shift=heading_shift, include_toc=include_toc)
        with click.open_file(output_file or "-", "w", encoding="utf-8") as out:
            out.write(markup)
    except click.Abort:
        raise
    except (WikiMarkupError, OSError) as e:
        console.print(f"[red]{format_error('Conversion', e)}[/red]")
        sys.exit(1)

    if output_file:
        console.print(f"[green]✓[/green] Wrote {flavor} markup to {output_file}")


@cli.command("serve")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "streamable-http"]),
    default="stdio",
    show_default=True,
    help="MCP transport",
)
def serve(transport):
    """Run the converter as an MCP server."""
    import wiki  # noqa: F401  registers the tools on the server
    from core.server import run_server

    run_server(transport=transport)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
