"""
Atlassian Wiki Markup Package

This package converts Markdown into Jira and Confluence wiki markup and
exposes the conversion as MCP tools.
"""

from wiki.converter import convert_file, convert_markdown
from wiki.events import Flavor
from wiki.renderer import AtlassianRenderer, render, write_toc
from wiki.tools import convert_markdown_file, markdown_to_confluence, markdown_to_jira

__all__ = [
    "AtlassianRenderer",
    "convert_file",
    "convert_markdown",
    "convert_markdown_file",
    "Flavor",
    "markdown_to_confluence",
    "markdown_to_jira",
    "render",
    "write_toc",
]
