#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ir/__init__.py
"""Intermediate representation, document builder and emission pass."""

from norg2ast.ir.builder import DocumentBuilder, DocumentContext
from norg2ast.ir.emit import emit_block, emit_document, emit_inlines, resolve_anchor, resolve_target

__all__ = [
    "DocumentBuilder",
    "DocumentContext",
    "emit_block",
    "emit_document",
    "emit_inlines",
    "resolve_anchor",
    "resolve_target",
]
