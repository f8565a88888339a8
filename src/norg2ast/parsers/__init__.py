#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/__init__.py
"""Parsers package.

:class:`~norg2ast.parsers.norg.NorgParser` converts norg sources and syntax
trees into the AST. The private ``_norg_*`` modules hold the handlers the
walker dispatches to for lists, quotes, tables, tags, inline content and
document metadata.
"""

from norg2ast.parsers.base import BaseParser
from norg2ast.parsers.norg import FieldIds, NorgParser, NorgWalker

__all__ = ["BaseParser", "FieldIds", "NorgParser", "NorgWalker"]
