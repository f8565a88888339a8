#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ast/nodes.py
"""AST node classes for converted norg documents.

This module defines the node hierarchy produced by the emission pass. Each
node represents a structural or inline element of the document and supports
the visitor pattern.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote, Null
    - List, ListItem, Table, TableRow, TableCell
    - DefinitionList, DefinitionTerm, DefinitionDescription, MathBlock

Inline nodes:
    - Text, Emphasis, Strong, Code, Link, Image
    - Strikethrough, Underline, Superscript, Subscript, MathInline

Notes
-----
``Paragraph`` nodes emitted for content that was not a paragraph in the
source (floating TODO markers, embedded images) carry ``{"plain": True}`` in
their metadata.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

Alignment = Literal["left", "center", "right"]


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    format : str, default = 'norg'
        Source format
    line : int or None, default = None
        Zero-based line of the node's first character
    column : int or None, default = None
        Zero-based byte column of the node's first character
    end_line : int or None, default = None
        Zero-based line where the node ends
    end_column : int or None, default = None
        Zero-based byte column where the node ends (exclusive)
    start_byte : int or None, default = None
        Offset of the node's first byte in the UTF-8 source
    end_byte : int or None, default = None
        Offset one past the node's last byte in the UTF-8 source
    metadata : dict, default = empty dict
        Additional location information

    """

    format: str = "norg"
    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    start_byte: Optional[int] = None
    end_byte: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node
    source_location : SourceLocation or None, default = None
        Information about where this node came from in the source. It is
        not compared when nodes are tested for equality.

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document metadata parsed from ``@document.meta`` blocks. Values are
        strings, lists or nested dicts.
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (levels 1-6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    identifier : str, default = ''
        Unique identifier that heading links resolve to
    metadata : dict, default = empty dict
        Heading metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    content: list[Node] = field(default_factory=list)
    identifier: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_heading method

        Returns
        -------
        Any
            Result from visitor.visit_heading(self)

        """
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata (``plain`` marks synthesized paragraphs)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def is_plain(self) -> bool:
        return bool(self.metadata.get("plain"))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Code block node with optional language specification.

    Parameters
    ----------
    content : str
        Code content, dedented
    language : str or None, default = None
        Programming language for syntax highlighting
    metadata : dict, default = empty dict
        Code block metadata (``parameters`` holds tag parameters beyond the language)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_code_block method

        Returns
        -------
        Any
            Result from visitor.visit_code_block(self)

        """
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Nested quotes appear as ``BlockQuote`` children.
    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class Null(Node):
    """Placeholder block for a container that produced no content.

    Emitted for list runs in which no sibling could be matched, so that the
    output keeps one block per list run of the source.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this placeholder."""
        return visitor.visit_null(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    metadata : dict, default = empty dict
        List metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    A list item holds paragraphs, nested lists and any other block element.
    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with an optional header row.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Optional header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None). One entry
        per column, so its length is the column count of the table.
    metadata : dict, default = empty dict
        Table metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def num_cols(self) -> int:
        return len(self.alignments)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_table method

        Returns
        -------
        Any
            Result from visitor.visit_table(self)

        """
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is a header row
    metadata : dict, default = empty dict
        Row metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Block content of the cell; cells placed by location hold
        paragraphs, cells of pipe tables hold a single plain paragraph
    metadata : dict, default = empty dict
        Cell metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class DefinitionList(Node):
    """Definition list node (block).

    Parameters
    ----------
    items : list of tuple, default = empty list
        List of (DefinitionTerm, list[DefinitionDescription]) tuples
    metadata : dict, default = empty dict
        Definition list metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_definition_list method

        Returns
        -------
        Any
            Result from visitor.visit_definition_list(self)

        """
        return visitor.visit_definition_list(self)


@dataclass
class DefinitionTerm(Node):
    """Term of a definition list, holding inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition term."""
        return visitor.visit_definition_term(self)


@dataclass
class DefinitionDescription(Node):
    """Description of a definition list term, holding block content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition description."""
        return visitor.visit_definition_description(self)


@dataclass
class MathBlock(Node):
    """Display math block.

    Parameters
    ----------
    content : str
        Math content (without delimiters)
    metadata : dict, default = empty dict
        Math block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this math block."""
        return visitor.visit_math_block(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content
    metadata : dict, default = empty dict
        Text metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Underline(Node):
    """Underline node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this underline."""
        return visitor.visit_underline(self)


@dataclass
class Superscript(Node):
    """Superscript node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this superscript."""
        return visitor.visit_superscript(self)


@dataclass
class Subscript(Node):
    """Subscript node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this subscript."""
        return visitor.visit_subscript(self)


@dataclass
class Code(Node):
    """Inline code (verbatim) node.

    Parameters
    ----------
    content : str
        Code content, taken verbatim from between the delimiters
    metadata : dict, default = empty dict
        Code metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Link destination. Heading links resolve to ``#<identifier>``;
        unresolved references have an empty URL.
    content : list of Node, default = empty list
        Inline nodes representing link text
    metadata : dict, default = empty dict
        Link metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_link method

        Returns
        -------
        Any
            Result from visitor.visit_link(self)

        """
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Image source URL or path
    metadata : dict, default = empty dict
        Image metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class MathInline(Node):
    """Inline math node.

    Parameters
    ----------
    content : str
        Math content (without delimiters)
    metadata : dict, default = empty dict
        Math metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline math."""
        return visitor.visit_math_inline(self)


_CONTENT_NODES = (
    Heading,
    Paragraph,
    Emphasis,
    Strong,
    Strikethrough,
    Underline,
    Superscript,
    Subscript,
    Link,
    TableCell,
    DefinitionTerm,
    DefinitionDescription,
)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, _CONTENT_NODES):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, DefinitionList):
        dl_children: list[Node] = []
        for term, descriptions in node.items:
            dl_children.append(term)
            dl_children.extend(descriptions)
        return dl_children

    return []
