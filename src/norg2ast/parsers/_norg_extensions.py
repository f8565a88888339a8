#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_extensions.py
"""Detached modifier extensions (``( )``, ``(x)``, ``(!)`` ...).

TODO statuses do not produce a block of their own: their symbol goes into
the document builder's inline collector, followed by a space, and ends up in
front of the next paragraph, heading title or definition term.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from norg2ast.constants import EXTENSION_DELIMITER_KINDS, TODO_ITEM_PREFIX
from norg2ast.ir.nodes import Space, Str

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["handle_detached_ext"]


def _add_todo_status(walker: NorgWalker, kind: str) -> None:
    status = kind[len(TODO_ITEM_PREFIX) :]
    symbol = walker.options.todo_symbols.for_status(status)
    if symbol is None:
        logger.error(f"Unknown todo status: {status!r}")
        return
    walker.document.push_inline(Str(symbol))
    walker.document.push_inline(Space())


def handle_detached_ext(walker: NorgWalker) -> None:
    def visit() -> None:
        kind = walker.cursor.node.type
        if kind in EXTENSION_DELIMITER_KINDS:
            return
        if kind.startswith(TODO_ITEM_PREFIX):
            _add_todo_status(walker, kind)
        else:
            logger.error(f"Unknown detached modifier extension: {kind!r}")

    walker.visit_children(visit)
