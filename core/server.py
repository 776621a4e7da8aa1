"""
FastMCP server instance shared by all tool modules.

Tool modules register their functions with `server.tool()` on import; `main.py`
imports the `wiki` package before starting the server.
"""

import logging

from fastmcp import FastMCP

logger = logging.getLogger(__name__)

SERVER_NAME = "atlassian-wiki"
SERVER_INSTRUCTIONS = (
    "Converts Markdown documents into Atlassian wiki markup. "
    "Use markdown_to_jira for Jira issues and comments, markdown_to_confluence for "
    "Confluence wiki pages, and convert_markdown_file for files on disk."
)

server = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS)


def run_server(transport: str = "stdio") -> None:
    """Run the MCP server on the given transport ("stdio" or "streamable-http")."""
    logger.info(f"Starting {SERVER_NAME} MCP server (transport={transport})")
    server.run(transport=transport)
