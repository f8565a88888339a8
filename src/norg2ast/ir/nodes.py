#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ir/nodes.py
"""Intermediate representation built during the tree walk.

The IR mirrors the shape of the source document closely and keeps
cross-references unresolved: ``Anchor`` names and ``HeadingTarget`` links
are looked up only when the finished IR is emitted (see
:mod:`norg2ast.ir.emit`), so references may point forward in the document.

Blocks carry the :class:`Span` of the syntax node they were built from. Spans
take no part in equality.

Inline nodes
    Space, Str, Emphasis, Strong, Underline, Strikeout, Subscript,
    Superscript, Code, Math, Link, Anchor, Image

Block nodes
    NullBlock, Plain, ParagraphBlock, HeadingBlock, QuoteBlock, MathBlockIR,
    CodeBlockIR, TableBlock, BulletList, OrderedList, DefinitionListBlock

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# ============================================================================
# Source spans
# ============================================================================


@dataclass(frozen=True)
class Span:
    """Byte range and zero-based (row, byte column) points of a syntax node."""

    start_byte: int
    end_byte: int
    start_point: tuple[int, int]
    end_point: tuple[int, int]

    @classmethod
    def of(cls, node: Any) -> Span:
        return cls(node.start_byte, node.end_byte, tuple(node.start_point), tuple(node.end_point))

    def join(self, other: Span) -> Span:
        """Span from the start of ``self`` to the end of ``other``."""
        return Span(self.start_byte, other.end_byte, self.start_point, other.end_point)


def _span() -> Any:
    return field(default=None, compare=False)


# ============================================================================
# Link targets
# ============================================================================


@dataclass(frozen=True)
class DocumentLinkKind:
    """Kind of an in-document reference; currently a heading of ``level``."""

    level: int

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading link level must be 1-6, got {self.level}")


@dataclass(frozen=True)
class NoTarget:
    """Link without a destination."""


@dataclass(frozen=True)
class DirectTarget:
    """Link to a URL."""

    url: str


@dataclass(frozen=True)
class FileTarget:
    """Link to a file outside the document."""

    path: str


@dataclass(frozen=True)
class HeadingTarget:
    """Link to a heading of this document, resolved on emission."""

    kind: DocumentLinkKind
    text: str


LinkTarget = Union[NoTarget, DirectTarget, FileTarget, HeadingTarget]

# ============================================================================
# Inlines
# ============================================================================


@dataclass
class Space:
    """Inter-word space (also used for soft line breaks)."""


@dataclass
class Str:
    text: str


@dataclass
class Emphasis:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Strong:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Underline:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Strikeout:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Subscript:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Superscript:
    content: list[Inline] = field(default_factory=list)


@dataclass
class Code:
    text: str


@dataclass
class Math:
    text: str


@dataclass
class Link:
    """Link with its description and unresolved target."""

    content: list[Inline]
    target: LinkTarget


@dataclass
class Anchor:
    """Reference to an anchor declared elsewhere in the document by ``name``."""

    content: list[Inline]
    name: str


@dataclass
class Image:
    url: str


Inline = Union[
    Space,
    Str,
    Emphasis,
    Strong,
    Underline,
    Strikeout,
    Subscript,
    Superscript,
    Code,
    Math,
    Link,
    Anchor,
    Image,
]

# Formatting wrappers holding a list of inlines
WRAPPER_INLINES = (Emphasis, Strong, Underline, Strikeout, Subscript, Superscript)

# ============================================================================
# Blocks
# ============================================================================


@dataclass
class NullBlock:
    """Placeholder for a container that produced no content."""

    span: Optional[Span] = _span()


@dataclass
class Plain:
    """Inline content that is not a paragraph of its own in the source."""

    content: list[Inline] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class ParagraphBlock:
    """Paragraph made of segments (source lines), joined by a space on emission."""

    segments: list[list[Inline]] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class HeadingBlock:
    level: int
    identifier: str
    content: list[Inline] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class QuoteBlock:
    blocks: list[Block] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class MathBlockIR:
    text: str
    span: Optional[Span] = _span()


@dataclass
class CodeBlockIR:
    """Code block; ``parameters`` holds tag parameters beyond the language."""

    language: Optional[str]
    text: str
    parameters: list[str] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class Cell:
    blocks: list[Block] = field(default_factory=list)
    span: Optional[Span] = _span()


Row = list[Cell]


@dataclass
class TableBlock:
    """Table with ``num_cols`` columns; an empty header means "no header row"."""

    num_cols: int
    header: Row = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class ListEntry:
    blocks: list[Block] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class BulletList:
    entries: list[ListEntry] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class OrderedList:
    entries: list[ListEntry] = field(default_factory=list)
    span: Optional[Span] = _span()


@dataclass
class DefinitionListBlock:
    """Definition list of ``(term inlines, description blocks)`` pairs."""

    entries: list[tuple[list[Inline], list[Block]]] = field(default_factory=list)
    span: Optional[Span] = _span()


Block = Union[
    NullBlock,
    Plain,
    ParagraphBlock,
    HeadingBlock,
    QuoteBlock,
    MathBlockIR,
    CodeBlockIR,
    TableBlock,
    BulletList,
    OrderedList,
    DefinitionListBlock,
]
