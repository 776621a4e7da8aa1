"""
Atlassian Wiki Markup Tools

This module provides MCP tools for converting Markdown into Jira and
Confluence wiki markup.
"""

import logging

from core.config import get_wiki_config
from core.server import server
from core.utils import handle_conversion_errors, validate_path_within_base
from wiki.converter import convert_file, convert_markdown
from wiki.events import Flavor

logger = logging.getLogger(__name__)


@handle_conversion_errors("markdown_to_jira")
async def markdown_to_jira(
    markdown: str,
    heading_shift: int = 0,
    include_toc: bool = False,
) -> str:
    """
    Converts Markdown text to Jira wiki markup.

    Args:
        markdown: The Markdown text to convert
        heading_shift: Number added to every heading level (e.g. 1 turns "#" into h2., -1 drops "#" headings)
        include_toc: Whether to start the output with the {toc} macro

    Returns:
        str: The Jira wiki markup
    """
    logger.info(f"[markdown_to_jira] Invoked. Length={len(markdown)}, heading_shift={heading_shift}, toc={include_toc}")
    return convert_markdown(markdown, flavor=Flavor.JIRA, heading_shift=heading_shift, include_toc=include_toc)


@handle_conversion_errors("markdown_to_confluence")
async def markdown_to_confluence(
    markdown: str,
    heading_shift: int = 0,
    include_toc: bool = False,
) -> str:
    """
    Converts Markdown text to Confluence wiki markup.

    Args:
        markdown: The Markdown text to convert
        heading_shift: Number added to every heading level
        include_toc: Whether to start the output with the {toc} macro

    Returns:
        str: The Confluence wiki markup
    """
    logger.info(
        f"[markdown_to_confluence] Invoked. Length={len(markdown)}, heading_shift={heading_shift}, toc={include_toc}"
    )
    return convert_markdown(markdown, flavor=Flavor.CONFLUENCE, heading_shift=heading_shift, include_toc=include_toc)


@handle_conversion_errors("convert_markdown_file")
async def convert_markdown_file(
    file_path: str,
    flavor: str | None = None,
    heading_shift: int | None = None,
    include_toc: bool | None = None,
) -> str:
    """
    Converts a Markdown file on the server to Jira or Confluence wiki markup.

    Args:
        file_path: Path of the Markdown file, relative to the configured base directory
        flavor: "jira" or "confluence" (defaults to ATLASSIAN_WIKI_FLAVOR)
        heading_shift: Number added to every heading level (defaults to ATLASSIAN_WIKI_HEADING_SHIFT)
        include_toc: Whether to start the output with the {toc} macro (defaults to ATLASSIAN_WIKI_TOC)

    Returns:
        str: The wiki markup
    """
    config = get_wiki_config()
    resolved_path = validate_path_within_base(config.base_dir, file_path)

    flavor = config.flavor if flavor is None else flavor
    heading_shift = config.heading_shift if heading_shift is None else heading_shift
    include_toc = config.include_toc if include_toc is None else include_toc

    logger.info(f"[convert_markdown_file] Path={resolved_path}, flavor={flavor}, heading_shift={heading_shift}")
    return convert_file(resolved_path, flavor=flavor, heading_shift=heading_shift, include_toc=include_toc)


# module-level names stay plain coroutine functions; the server holds its own tool wrappers
for _tool in (markdown_to_jira, markdown_to_confluence, convert_markdown_file):
    server.tool()(_tool)
