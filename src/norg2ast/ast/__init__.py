#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ast/__init__.py
"""Output document model of norg2ast.

The AST is a tree of dataclass nodes rooted at :class:`Document`. It is
produced by the emission pass of :mod:`norg2ast.ir` and can be traversed with
:class:`NodeVisitor` subclasses or serialized with :func:`ast_to_json`.
"""

from norg2ast.ast.nodes import (
    Alignment,
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
    SourceLocation,
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
from norg2ast.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from norg2ast.ast.visitors import NodeVisitor, OutlineCollector, TextCollector, extract_text

__all__ = [
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "Heading",
    "Image",
    "Link",
    "List",
    "ListItem",
    "MathBlock",
    "MathInline",
    "Node",
    "Null",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "Underline",
    "get_node_children",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    "NodeVisitor",
    "OutlineCollector",
    "TextCollector",
    "extract_text",
]
