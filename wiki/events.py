"""
Markdown event model consumed by the wiki markup renderer.

A document arrives as a flat, forward-only sequence of events: structural tags
are opened with `StartTag` and closed with `EndTag`, and leaf content
(`Text`, `InlineCode`, breaks, raw HTML) appears in between. The unions
`Tag` and `Event` list every variant the renderer handles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from core.errors import ValidationError


class Flavor(str, Enum):
    """Target wiki dialect. Only code-block headers differ between the two."""

    JIRA = "jira"
    CONFLUENCE = "confluence"

    @classmethod
    def parse(cls, value: str | Flavor) -> Flavor:
        """
        Convert user input ("jira", "Confluence", ...) into a Flavor.

        Raises:
            ValidationError: If the value names neither flavor.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"flavor must be 'jira' or 'confluence', got {value!r}") from None


class TagKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    LIST = "list"
    LIST_ITEM = "list_item"
    TABLE_HEAD = "table_head"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"


# =============================================================================
# Tags
# =============================================================================


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[TagKind] = TagKind.PARAGRAPH


@dataclass(frozen=True)
class Heading:
    level: int
    kind: ClassVar[TagKind] = TagKind.HEADING


@dataclass(frozen=True)
class BlockQuote:
    kind: ClassVar[TagKind] = TagKind.BLOCK_QUOTE


@dataclass(frozen=True)
class CodeBlock:
    # None for indented blocks and fences without an info string
    language: str | None = None
    kind: ClassVar[TagKind] = TagKind.CODE_BLOCK


@dataclass(frozen=True)
class List:
    ordered: bool = False
    kind: ClassVar[TagKind] = TagKind.LIST


@dataclass(frozen=True)
class ListItem:
    kind: ClassVar[TagKind] = TagKind.LIST_ITEM


@dataclass(frozen=True)
class TableHead:
    kind: ClassVar[TagKind] = TagKind.TABLE_HEAD


@dataclass(frozen=True)
class TableRow:
    kind: ClassVar[TagKind] = TagKind.TABLE_ROW


@dataclass(frozen=True)
class TableCell:
    kind: ClassVar[TagKind] = TagKind.TABLE_CELL


@dataclass(frozen=True)
class Emphasis:
    kind: ClassVar[TagKind] = TagKind.EMPHASIS


@dataclass(frozen=True)
class Strong:
    kind: ClassVar[TagKind] = TagKind.STRONG


@dataclass(frozen=True)
class Strikethrough:
    kind: ClassVar[TagKind] = TagKind.STRIKETHROUGH


@dataclass(frozen=True)
class Link:
    destination: str
    kind: ClassVar[TagKind] = TagKind.LINK


@dataclass(frozen=True)
class Image:
    destination: str
    kind: ClassVar[TagKind] = TagKind.IMAGE


Tag = Union[
    Paragraph,
    Heading,
    BlockQuote,
    CodeBlock,
    List,
    ListItem,
    TableHead,
    TableRow,
    TableCell,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    Image,
]


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class StartTag:
    tag: Tag


@dataclass(frozen=True)
class EndTag:
    kind: TagKind


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class TaskMarker:
    checked: bool = False


@dataclass(frozen=True)
class RawHtml:
    """A chunk of raw HTML; a single element may be split across several chunks."""

    html: str


Event = Union[StartTag, EndTag, Text, InlineCode, SoftBreak, HardBreak, ThematicBreak, TaskMarker, RawHtml]
