"""
markdown-it-py token stream to renderer events.

markdown-it produces a flat list of block tokens whose `inline` tokens carry
the inline content as children. This module walks that structure and yields
the flat event stream the renderer consumes (see `wiki/events.py`).

A few token shapes differ from the event model and are normalised here:
- paragraphs inside tight list items are hidden and produce no events
- the header row of a table is not reported as a row; its cells sit directly
  under `TableHead`
- `image` is a single token with the alt text as children; it is expanded
  into start tag, children and end tag
- task list checkboxes injected by the tasklists plugin become `TaskMarker`
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from wiki.events import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    EndTag,
    Event,
    HardBreak,
    Heading,
    Image,
    InlineCode,
    Link,
    List,
    ListItem,
    Paragraph,
    RawHtml,
    SoftBreak,
    StartTag,
    Strikethrough,
    Strong,
    TableCell,
    TableHead,
    TableRow,
    TagKind,
    TaskMarker,
    Text,
    ThematicBreak,
)

if TYPE_CHECKING:
    from markdown_it.token import Token

logger = logging.getLogger(__name__)

TASK_CHECKBOX_CLASS = 'class="task-list-item-checkbox"'
TASK_CHECKBOX_CHECKED = 'checked="checked"'

# Token types that map one-to-one onto a start/end pair with no payload
_SIMPLE_BLOCK_TAGS = {
    "blockquote_open": StartTag(BlockQuote()),
    "blockquote_close": EndTag(TagKind.BLOCK_QUOTE),
    "bullet_list_open": StartTag(List(ordered=False)),
    "bullet_list_close": EndTag(TagKind.LIST),
    "ordered_list_open": StartTag(List(ordered=True)),
    "ordered_list_close": EndTag(TagKind.LIST),
    "list_item_open": StartTag(ListItem()),
    "list_item_close": EndTag(TagKind.LIST_ITEM),
    "thead_open": StartTag(TableHead()),
    "thead_close": EndTag(TagKind.TABLE_HEAD),
    "th_open": StartTag(TableCell()),
    "th_close": EndTag(TagKind.TABLE_CELL),
    "td_open": StartTag(TableCell()),
    "td_close": EndTag(TagKind.TABLE_CELL),
    "heading_close": EndTag(TagKind.HEADING),
}

_SIMPLE_INLINE_TAGS = {
    "em_open": StartTag(Emphasis()),
    "em_close": EndTag(TagKind.EMPHASIS),
    "strong_open": StartTag(Strong()),
    "strong_close": EndTag(TagKind.STRONG),
    "s_open": StartTag(Strikethrough()),
    "s_close": EndTag(TagKind.STRIKETHROUGH),
    "link_close": EndTag(TagKind.LINK),
}

# Table wrappers carry no markup of their own
_IGNORED_BLOCK_TOKENS = frozenset({"table_open", "table_close", "tbody_open", "tbody_close"})


def fence_language(info: str) -> str | None:
    """
    Extract the language token from a fence info string.

    Only the first word counts ("python title=x.py" -> "python"); an empty
    info string means the fence has no language.
    """
    words = info.split()
    return words[0] if words else None


class MarkdownEventSource:
    """
    Parses Markdown and yields renderer events.

    The parser is CommonMark with the GFM table and strikethrough extensions
    and the tasklists plugin, which is the dialect the renderer is written for.
    """

    def __init__(self) -> None:
        self.md = MarkdownIt("commonmark").enable("table").enable("strikethrough").use(tasklists_plugin)

    def events(self, markdown_text: str) -> Iterator[Event]:
        """
        Parse `markdown_text` and yield its events in document order.

        Args:
            markdown_text: The Markdown source.

        Yields:
            Events as defined in `wiki/events.py`.
        """
        tokens: list[Token] = self.md.parse(markdown_text)
        in_table_head = False

        for token in tokens:
            logger.debug(f"Token: type={token.type}, tag={token.tag}, nesting={token.nesting}")

            if token.type in _SIMPLE_BLOCK_TAGS:
                if token.type == "thead_open":
                    in_table_head = True
                elif token.type == "thead_close":
                    in_table_head = False
                yield _SIMPLE_BLOCK_TAGS[token.type]
            elif token.type == "inline":
                yield from self._inline_events(token.children or [])
            elif token.type in ("paragraph_open", "paragraph_close"):
                if token.hidden:
                    continue
                yield StartTag(Paragraph()) if token.nesting == 1 else EndTag(TagKind.PARAGRAPH)
            elif token.type == "heading_open":
                yield StartTag(Heading(level=int(token.tag[1:])))
            elif token.type in ("tr_open", "tr_close"):
                if in_table_head:
                    continue
                yield StartTag(TableRow()) if token.nesting == 1 else EndTag(TagKind.TABLE_ROW)
            elif token.type == "fence":
                yield from self._code_block_events(token.content, fence_language(token.info))
            elif token.type == "code_block":
                yield from self._code_block_events(token.content, None)
            elif token.type == "hr":
                yield ThematicBreak()
            elif token.type == "html_block":
                yield RawHtml(token.content)
            elif token.type in _IGNORED_BLOCK_TOKENS:
                continue
            else:
                logger.debug(f"Skipping unsupported token: {token.type}")

    @staticmethod
    def _code_block_events(content: str, language: str | None) -> Iterator[Event]:
        yield StartTag(CodeBlock(language=language))
        if content:
            yield Text(content)
        yield EndTag(TagKind.CODE_BLOCK)

    def _inline_events(self, children: Sequence[Token]) -> Iterator[Event]:
        """
        Yield events for the children of an inline token.

        Args:
            children: Inline child tokens (text, code, emphasis, links, ...).
        """
        strip_task_space = False

        for child in children:
            logger.debug(f"  Child: type={child.type}, content={child.content!r}")

            if child.type in ("text", "text_special"):
                content = child.content
                if strip_task_space and content.startswith(" "):
                    # the tasklists plugin leaves the space after "[ ]" on the label
                    content = content[1:]
                strip_task_space = False
                yield Text(content)
                continue

            strip_task_space = False
            if child.type in _SIMPLE_INLINE_TAGS:
                yield _SIMPLE_INLINE_TAGS[child.type]
            elif child.type == "code_inline":
                yield InlineCode(child.content)
            elif child.type == "softbreak":
                yield SoftBreak()
            elif child.type == "hardbreak":
                yield HardBreak()
            elif child.type == "link_open":
                yield StartTag(Link(destination=str(child.attrGet("href") or "")))
            elif child.type == "image":
                yield StartTag(Image(destination=str(child.attrGet("src") or "")))
                yield from self._inline_events(child.children or [])
                yield EndTag(TagKind.IMAGE)
            elif child.type == "html_inline":
                if TASK_CHECKBOX_CLASS in child.content:
                    yield TaskMarker(checked=TASK_CHECKBOX_CHECKED in child.content)
                    strip_task_space = True
                else:
                    yield RawHtml(child.content)
            else:
                logger.debug(f"Skipping unsupported inline token: {child.type}")
