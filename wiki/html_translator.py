"""
Raw HTML to wiki markup translation.

Markdown documents occasionally embed HTML. Only collapsible sections are
translated:

    <details><summary>Title</summary>Body</details>

becomes

    {expand|title=Title}
    Body
    {expand}

Every other element is treated as a transparent container: its text is kept,
the tags themselves disappear. Fragments are parsed with html5lib, whose parse
error list tells us whether a fragment is complete; the renderer keeps
buffering raw HTML until it is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from xml.dom import Node

import html5lib

from wiki.escaping import escape

logger = logging.getLogger(__name__)

EXPAND_OPEN = "{expand"
EXPAND_CLOSE = "\n{expand}\n"
TITLE_PREFIX = "|title="
MACRO_HEADER_END = "}\n"


def parse_fragment(html: str) -> Node | None:
    """
    Parse an HTML fragment.

    Args:
        html: Raw HTML text, possibly only part of an element.

    Returns:
        The DOM fragment node, or None when the parser reported any error
        (unclosed or stray tags), meaning more input is needed.
    """
    parser = html5lib.HTMLParser(tree=html5lib.getTreeBuilder("dom"), namespaceHTMLElements=False)
    fragment = parser.parseFragment(html)
    if parser.errors:
        logger.debug(f"HTML fragment incomplete ({len(parser.errors)} parse errors): {html!r}")
        return None
    return fragment


def _element_name(node: Node) -> str:
    return node.tagName.lower()


def _has_summary_child(node: Node) -> bool:
    return any(
        child.nodeType == Node.ELEMENT_NODE and _element_name(child) == "summary" for child in node.childNodes
    )


def iter_markup(fragment: Node) -> Iterator[str]:
    """
    Yield the wiki markup for a parsed fragment piece by piece.

    The tree is walked depth-first in document order using an explicit stack,
    so deeply nested input cannot exhaust the interpreter's recursion limit.
    Each stack entry is a node plus a flag telling whether the node is being
    entered or closed.
    """
    stack: list[tuple[Node, bool]] = [(fragment, False)]

    while stack:
        node, closing = stack.pop()

        if closing:
            # only details and summary elements are ever pushed for closing
            yield EXPAND_CLOSE if _element_name(node) == "details" else MACRO_HEADER_END
            continue

        if node.nodeType == Node.TEXT_NODE:
            yield escape(node.data.lstrip("\n "))
            continue

        if node.nodeType == Node.ELEMENT_NODE:
            name = _element_name(node)
            if name == "details":
                yield EXPAND_OPEN
                # a summary child writes the closing brace after the title
                if not _has_summary_child(node):
                    yield MACRO_HEADER_END
                stack.append((node, True))
            elif name == "summary":
                yield TITLE_PREFIX
                stack.append((node, True))

        stack.extend((child, False) for child in reversed(node.childNodes))


def translate(fragment: Node) -> str:
    """Translate a parsed fragment into wiki markup."""
    return "".join(iter_markup(fragment))
