"""
String-level Markdown to wiki markup conversion.

This is the entry point used by the CLI and the MCP tools: it validates the
options, parses the Markdown, optionally prepends the {toc} macro and renders
into an in-memory buffer.
"""

import io
import logging
import os

from core.errors import SourceFileNotFoundError, ValidationError
from core.utils import validate_heading_shift, validate_markdown
from wiki.events import Flavor
from wiki.markdown_events import MarkdownEventSource
from wiki.renderer import AtlassianRenderer, write_toc

logger = logging.getLogger(__name__)

_event_source: MarkdownEventSource | None = None


def get_event_source() -> MarkdownEventSource:
    """Return the shared Markdown parser, creating it on first use."""
    global _event_source
    if _event_source is None:
        _event_source = MarkdownEventSource()
    return _event_source


def convert_markdown(
    markdown: str,
    flavor: str | Flavor = Flavor.JIRA,
    heading_shift: int = 0,
    include_toc: bool = False,
) -> str:
    """
    Convert Markdown text to Atlassian wiki markup.

    Args:
        markdown: The Markdown source.
        flavor: "jira" or "confluence" (or a Flavor member).
        heading_shift: Added to every heading level; headings shifted to 0 or
            below are dropped, above 6 become plain text.
        include_toc: Prepend the {toc} macro.

    Returns:
        The wiki markup.

    Raises:
        ValidationError: If any option is out of range.
    """
    markdown = validate_markdown(markdown)
    flavor = Flavor.parse(flavor)
    heading_shift = validate_heading_shift(heading_shift)

    logger.debug(
        f"Converting {len(markdown)} chars of Markdown (flavor={flavor.value}, "
        f"heading_shift={heading_shift}, toc={include_toc})"
    )

    buffer = io.StringIO()
    if include_toc:
        write_toc(buffer)
    renderer = AtlassianRenderer(heading_shift=heading_shift, flavor=flavor)
    renderer.render(get_event_source().events(markdown), buffer)
    return buffer.getvalue()


def convert_file(
    path: str,
    flavor: str | Flavor = Flavor.JIRA,
    heading_shift: int = 0,
    include_toc: bool = False,
) -> str:
    """
    Read a UTF-8 Markdown file and convert it.

    Raises:
        SourceFileNotFoundError: If `path` is not an existing file.
        ValidationError: If the file is not valid UTF-8.
    """
    if not os.path.isfile(path):
        raise SourceFileNotFoundError(path=path)

    try:
        with open(path, encoding="utf-8") as f:
            markdown = f.read()
    except UnicodeDecodeError as e:
        raise ValidationError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e

    logger.info(f"Converting {path} to {Flavor.parse(flavor).value} markup")
    return convert_markdown(markdown, flavor=flavor, heading_shift=heading_shift, include_toc=include_toc)
