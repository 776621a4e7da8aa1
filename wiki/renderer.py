"""
Markdown events to Atlassian wiki markup renderer

This module provides the `AtlassianRenderer` class, a single-pass state machine
that consumes the event stream described in `wiki/events.py` and writes Jira or
Confluence wiki markup to a text sink as it goes.

Example:
    >>> import io
    >>> from wiki.markdown_events import MarkdownEventSource
    >>> sink = io.StringIO()
    >>> render(MarkdownEventSource().events("# Title"), sink)
    >>> sink.getvalue()
    'h1. Title\\n'

See Also:
    - `wiki/markdown_events.py` for the markdown-it-py token adapter
    - `wiki/html_translator.py` for the <details>/<summary> translation
    - `wiki/converter.py` for the string-in/string-out entry point
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from core.errors import UnknownFlavorError
from wiki.escaping import escape
from wiki.events import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    EndTag,
    Event,
    Flavor,
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
    Tag,
    TagKind,
    TaskMarker,
    Text,
    ThematicBreak,
)
from wiki.html_translator import iter_markup, parse_fragment
from wiki.languages import resolve_language

logger = logging.getLogger(__name__)

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

ORDERED_MARKER = "#"
UNORDERED_MARKER = "*"

HEADER_CELL_DELIMITER = "||"
CELL_DELIMITER = "|"

TOC_MACRO = "{toc}\n\n"

# Symmetric inline delimiters, written on both open and close
INLINE_DELIMITERS: dict[TagKind, str] = {
    TagKind.EMPHASIS: "_",
    TagKind.STRONG: "*",
    TagKind.STRIKETHROUGH: "-",
}


class AtlassianRenderer:
    """
    Renders a Markdown event stream as Atlassian wiki markup.

    The renderer holds all conversion state and is reset at the start of every
    `render()` call, so one instance can render several documents in turn:
    - `wrote_trailing_newline`: whether the last text that reached the sink ended
      in a newline (keeps list items and headings from doubling blank lines)
    - `in_table_header`: whether cells currently belong to the header row
    - `list_marker_stack`: one marker per open list, "#" ordered or "*" unordered;
      joined outer to inner it is the bullet prefix of the current item
    - `pending_inline_code_space`: set after inline code so the next text does
      not glue onto the closing "}}"
    - `suppress_output`: true inside a heading shifted to level 0 or below
    - `html_accumulator`: raw HTML waiting for its closing tags
    - `pending_link_destination`: link target, written after the link text

    Attributes:
        heading_shift: Added to every heading level before rendering.
        flavor: Jira or Confluence; selects the code block header syntax.

    Example:
        >>> renderer = AtlassianRenderer(heading_shift=1, flavor=Flavor.CONFLUENCE)
        >>> renderer.render(events, sys.stdout)
    """

    def __init__(self, heading_shift: int = 0, flavor: Flavor = Flavor.JIRA) -> None:
        """
        Initialize the renderer.

        Raises:
            UnknownFlavorError: If `flavor` is not a `Flavor` member. Parse user
                input with `Flavor.parse()` first.
        """
        if not isinstance(flavor, Flavor):
            raise UnknownFlavorError(flavor)
        self.heading_shift = heading_shift
        self.flavor = flavor
        self._sink: TextIO | None = None
        self._reset()

    def _reset(self) -> None:
        self.wrote_trailing_newline: bool = False
        self.in_table_header: bool = False
        self.list_marker_stack: list[str] = []
        self.pending_inline_code_space: bool = False
        self.suppress_output: bool = False
        self.html_accumulator: str = ""
        self.pending_link_destination: str = ""
        # >0 while inside an image, whose caption text is escaped
        self._image_depth: int = 0

    def render(self, events: Iterable[Event], sink: TextIO) -> None:
        """
        Consume `events` and write wiki markup to `sink`.

        Args:
            events: The document's event stream; iterated exactly once.
            sink: Any object with a text `write()` method.

        Raises:
            OSError: The first write failure; rendering stops immediately.
        """
        self._reset()
        self._sink = sink
        try:
            for event in events:
                self._handle_event(event)
        finally:
            self._sink = None

        if self.html_accumulator:
            logger.debug(f"Discarding unbalanced HTML at end of document: {self.html_accumulator!r}")
            self.html_accumulator = ""
        if self.suppress_output:
            logger.warning("Event stream ended inside a suppressed heading")
            self.suppress_output = False

    # =========================================================================
    # Output
    # =========================================================================

    def _write(self, text: str) -> None:
        """
        Write `text` to the sink unless output is suppressed.

        Suppressed writes leave `wrote_trailing_newline` untouched, so it always
        describes what actually reached the sink.
        """
        if self.suppress_output:
            return
        self.wrote_trailing_newline = text.endswith("\n")
        self._sink.write(text)

    def _write_newline(self) -> None:
        self._write("\n")

    def _write_escaped(self, text: str) -> None:
        self._write(escape(text))

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _handle_event(self, event: Event) -> None:
        """Dispatch an event to the appropriate handler based on its type."""
        logger.debug(f"Event: {event!r}")

        if isinstance(event, StartTag):
            self._handle_start_tag(event.tag)
        elif isinstance(event, EndTag):
            self._handle_end_tag(event.kind)
        elif isinstance(event, Text):
            self._handle_text(event.text)
        elif isinstance(event, InlineCode):
            self._handle_inline_code(event.text)
        elif isinstance(event, SoftBreak):
            # a soft line break in Markdown is not a line break in wiki markup
            self._write(" ")
        elif isinstance(event, HardBreak):
            self._write_newline()
        elif isinstance(event, ThematicBreak):
            self._write_newline()
            self._write("----")
            self._write_newline()
        elif isinstance(event, TaskMarker):
            # checked and unchecked items render the same
            self._write_newline()
            self._write("[] ")
        elif isinstance(event, RawHtml):
            self._handle_raw_html(event.html)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def _handle_start_tag(self, tag: Tag) -> None:
        if isinstance(tag, Paragraph):
            self._write_newline()
        elif isinstance(tag, Heading):
            self._handle_heading_start(tag)
        elif isinstance(tag, BlockQuote):
            self._write_newline()
            self._write("{quote}")
        elif isinstance(tag, CodeBlock):
            self._handle_code_block_start(tag)
        elif isinstance(tag, List):
            self.list_marker_stack.append(ORDERED_MARKER if tag.ordered else UNORDERED_MARKER)
            self._write_newline()
        elif isinstance(tag, ListItem):
            if not self.wrote_trailing_newline:
                self._write_newline()
            self._write("".join(self.list_marker_stack) + " ")
        elif isinstance(tag, TableHead):
            self.in_table_header = True
            self._write_newline()
            self._write(HEADER_CELL_DELIMITER)
        elif isinstance(tag, TableRow):
            self._write(self._cell_delimiter())
        elif isinstance(tag, TableCell):
            # cells are closed, not opened; the row start opens the first one
            pass
        elif isinstance(tag, (Emphasis, Strong, Strikethrough)):
            self._write(INLINE_DELIMITERS[tag.kind])
        elif isinstance(tag, Link):
            self.pending_link_destination = tag.destination
            self._write("[")
        elif isinstance(tag, Image):
            self._image_depth += 1
            self._write(f'!{tag.destination}|title="')
        else:
            raise TypeError(f"Unsupported tag: {tag!r}")

    def _handle_end_tag(self, kind: TagKind) -> None:
        if kind is TagKind.PARAGRAPH:
            self._write_newline()
        elif kind is TagKind.HEADING:
            if self.suppress_output:
                self.suppress_output = False
            else:
                self._write_newline()
        elif kind is TagKind.BLOCK_QUOTE:
            self._write("{quote}")
            self._write_newline()
        elif kind is TagKind.CODE_BLOCK:
            self._write("{code}")
            self._write_newline()
        elif kind is TagKind.LIST:
            if self.list_marker_stack:
                self.list_marker_stack.pop()
            else:
                logger.warning("List end without matching list start")
            # only the outermost list is followed by a newline
            if not self.list_marker_stack:
                self._write_newline()
        elif kind is TagKind.LIST_ITEM:
            pass
        elif kind is TagKind.TABLE_HEAD:
            self.in_table_header = False
            self._write_newline()
        elif kind is TagKind.TABLE_ROW:
            self._write_newline()
        elif kind is TagKind.TABLE_CELL:
            self._write(self._cell_delimiter())
        elif kind in INLINE_DELIMITERS:
            self._write(INLINE_DELIMITERS[kind])
        elif kind is TagKind.LINK:
            self._write(f"|{self.pending_link_destination}]")
            self.pending_link_destination = ""
        elif kind is TagKind.IMAGE:
            self._image_depth = max(self._image_depth - 1, 0)
            # alt is always left empty; the caption went into title
            self._write('",alt=""!')
        else:
            raise TypeError(f"Unsupported tag kind: {kind!r}")

    # =========================================================================
    # Handlers
    # =========================================================================

    def _handle_heading_start(self, tag: Heading) -> None:
        """
        Open a heading, shifted by `heading_shift`.

        Levels above 6 lose the "hN. " prefix and render as plain text; levels
        of 0 or below vanish together with their content.
        """
        if self.wrote_trailing_newline:
            self._write_newline()

        shifted = tag.level + self.heading_shift
        if shifted < MIN_HEADING_LEVEL:
            logger.debug(f"Dropping heading: level {tag.level} shifted to {shifted}")
            self.suppress_output = True
        elif shifted <= MAX_HEADING_LEVEL:
            self._write(f"h{shifted}. ")
        else:
            logger.debug(f"Heading level {tag.level} shifted to {shifted}; rendering as text")

    def _handle_code_block_start(self, tag: CodeBlock) -> None:
        """
        Open a {code} macro.

        Fenced blocks with a language get a highlighting parameter, using the
        closest language the wiki supports.
        """
        self._write_newline()
        self._write("{code")
        if tag.language:
            language = resolve_language(tag.language.lower())
            if self.flavor is Flavor.JIRA:
                self._write(f":{language}")
            else:
                self._write(f":language={language}")
        self._write("}")
        self._write_newline()

    def _handle_text(self, text: str) -> None:
        if self.pending_inline_code_space and not text.startswith(" "):
            # keep the next word from being glued onto the closing }}
            self._write(" ")
        self.pending_inline_code_space = False

        if self._image_depth:
            self._write_escaped(text)
        else:
            self._write(text)

    def _handle_inline_code(self, text: str) -> None:
        self._write("{{")
        self._write_escaped(text)
        self._write("}}")
        self.pending_inline_code_space = True

    def _handle_raw_html(self, html: str) -> None:
        """
        Buffer raw HTML and translate it once the buffer is a balanced fragment.

        Block HTML arrives in pieces (an opening <details> line, Markdown
        content, then the closing tag), so the accumulated text is re-parsed on
        every chunk until it parses cleanly.
        """
        self.html_accumulator += html
        fragment = parse_fragment(self.html_accumulator)
        if fragment is None:
            return

        for markup in iter_markup(fragment):
            self._write(markup)
        self.html_accumulator = ""

    def _cell_delimiter(self) -> str:
        return HEADER_CELL_DELIMITER if self.in_table_header else CELL_DELIMITER


def render(
    events: Iterable[Event],
    sink: TextIO,
    heading_shift: int = 0,
    flavor: Flavor = Flavor.JIRA,
) -> None:
    """
    Render `events` as wiki markup into `sink`.

    Args:
        events: Markdown event stream, consumed once.
        sink: Text stream to write to.
        heading_shift: Integer added to every heading level (may be negative).
        flavor: Jira or Confluence.

    Raises:
        OSError: If writing to `sink` fails.
        UnknownFlavorError: If `flavor` is not a `Flavor` member.
    """
    AtlassianRenderer(heading_shift=heading_shift, flavor=flavor).render(events, sink)


def write_toc(sink: TextIO) -> None:
    """Write the table of contents macro followed by a blank line."""
    sink.write(TOC_MACRO)
