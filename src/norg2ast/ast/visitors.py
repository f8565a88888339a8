#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Visitors separate algorithms over the document (text extraction, outline
building, validation) from the node classes themselves. Every node's
``accept`` method calls the matching ``visit_*`` method.

"""

from __future__ import annotations

from typing import Any

from norg2ast.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Null,
    Paragraph,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
    Underline,
    get_node_children,
)


class NodeVisitor:
    """Base class for AST node visitors.

    Every ``visit_*`` method defaults to :meth:`generic_visit`, which visits
    the node's children in document order. Subclasses override the methods
    for the node types they care about.

    Examples
    --------
    Count the links of a document:

        >>> class LinkCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_link(self, node):
        ...         self.count += 1
        ...         self.generic_visit(node)

    """

    def generic_visit(self, node: Node) -> Any:
        """Visit all children of ``node``.

        Parameters
        ----------
        node : Node
            Node whose children are visited

        """
        for child in get_node_children(node):
            child.accept(self)

    def visit_document(self, node: Document) -> Any:
        return self.generic_visit(node)

    def visit_heading(self, node: Heading) -> Any:
        return self.generic_visit(node)

    def visit_paragraph(self, node: Paragraph) -> Any:
        return self.generic_visit(node)

    def visit_code_block(self, node: CodeBlock) -> Any:
        return self.generic_visit(node)

    def visit_block_quote(self, node: BlockQuote) -> Any:
        return self.generic_visit(node)

    def visit_null(self, node: Null) -> Any:
        return self.generic_visit(node)

    def visit_list(self, node: List) -> Any:
        return self.generic_visit(node)

    def visit_list_item(self, node: ListItem) -> Any:
        return self.generic_visit(node)

    def visit_table(self, node: Table) -> Any:
        return self.generic_visit(node)

    def visit_table_row(self, node: TableRow) -> Any:
        return self.generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> Any:
        return self.generic_visit(node)

    def visit_definition_list(self, node: DefinitionList) -> Any:
        return self.generic_visit(node)

    def visit_definition_term(self, node: DefinitionTerm) -> Any:
        return self.generic_visit(node)

    def visit_definition_description(self, node: DefinitionDescription) -> Any:
        return self.generic_visit(node)

    def visit_math_block(self, node: MathBlock) -> Any:
        return self.generic_visit(node)

    def visit_text(self, node: Text) -> Any:
        return self.generic_visit(node)

    def visit_emphasis(self, node: Emphasis) -> Any:
        return self.generic_visit(node)

    def visit_strong(self, node: Strong) -> Any:
        return self.generic_visit(node)

    def visit_strikethrough(self, node: Strikethrough) -> Any:
        return self.generic_visit(node)

    def visit_underline(self, node: Underline) -> Any:
        return self.generic_visit(node)

    def visit_superscript(self, node: Superscript) -> Any:
        return self.generic_visit(node)

    def visit_subscript(self, node: Subscript) -> Any:
        return self.generic_visit(node)

    def visit_code(self, node: Code) -> Any:
        return self.generic_visit(node)

    def visit_link(self, node: Link) -> Any:
        return self.generic_visit(node)

    def visit_image(self, node: Image) -> Any:
        return self.generic_visit(node)

    def visit_math_inline(self, node: MathInline) -> Any:
        return self.generic_visit(node)


class TextCollector(NodeVisitor):
    """Collect the plain text of a subtree.

    Examples
    --------
    >>> collector = TextCollector()
    >>> Paragraph(content=[Text("a "), Strong(content=[Text("b")])]).accept(collector)
    >>> collector.text
    'a b'

    """

    def __init__(self) -> None:
        self.parts: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self.parts)

    def visit_text(self, node: Text) -> None:
        self.parts.append(node.content)

    def visit_code(self, node: Code) -> None:
        self.parts.append(node.content)

    def visit_math_inline(self, node: MathInline) -> None:
        self.parts.append(node.content)


class OutlineCollector(NodeVisitor):
    """Collect ``(level, identifier, text)`` for every heading, in document order.

    Used by the command-line interface to print a document outline.
    """

    def __init__(self) -> None:
        self.headings: list[tuple[int, str, str]] = []

    def visit_heading(self, node: Heading) -> None:
        collector = TextCollector()
        collector.generic_visit(node)
        self.headings.append((node.level, node.identifier, collector.text))


def extract_text(node: Node) -> str:
    """Return the concatenated text content of ``node`` and its descendants."""
    collector = TextCollector()
    node.accept(collector)
    return collector.text
