"""norg2ast - Convert Neorg documents into a structured document AST.

norg2ast walks the concrete syntax tree produced by the tree-sitter norg
grammar and builds a format-neutral document model: headings, paragraphs,
nested lists, block quotes, tables, definition lists, code and math blocks,
inline formatting, links and document metadata.

Conversion happens in two phases. A single depth-first walk of the syntax
tree collects an intermediate representation together with registries of
anchors and headings; an emission pass then produces the AST and resolves
every cross-reference, so links may point at anchors and headings defined
later in the document.

Requirements
------------
- Python 3.10+
- ``tree-sitter`` and ``tree-sitter-norg`` to parse norg source text
  (install the ``norg`` extra). Syntax trees built with :mod:`norg2ast.cst`
  can be converted without them.

Examples
--------
Convert a file:

    >>> from norg2ast import to_ast
    >>> doc = to_ast("notes.norg")
    >>> doc.metadata.get("title")

Serialize the result:

    >>> from norg2ast.ast import ast_to_json
    >>> print(ast_to_json(doc, indent=2))

Convert a hand-built syntax tree:

    >>> from norg2ast import tree_to_ast
    >>> from norg2ast.cst import build_tree, node, token
    >>> tree = build_tree(node("document", node("paragraph", node("paragraph_segment", token("_word", "Hi")))))
    >>> tree_to_ast(tree).children[0].content[0].content
    'Hi'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "norg2ast requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from norg2ast.api import to_ast, tree_to_ast
from norg2ast.exceptions import (
    DependencyError,
    InvalidLocationError,
    MetadataSyntaxError,
    Norg2AstError,
    ParsingError,
    ScopeError,
)
from norg2ast.options import BaseParserOptions, NorgParserOptions, TodoSymbols
from norg2ast.parsers.norg import NorgParser

__all__ = [
    "__version__",
    "to_ast",
    "tree_to_ast",
    "NorgParser",
    "BaseParserOptions",
    "NorgParserOptions",
    "TodoSymbols",
    "Norg2AstError",
    "DependencyError",
    "ParsingError",
    "InvalidLocationError",
    "MetadataSyntaxError",
    "ScopeError",
]
