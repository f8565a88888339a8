#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_lists.py
"""List reconstruction for the norg walker.

The norg grammar encodes the type and depth of a list item in its node kind
(``unordered_list1`` ... ``unordered_list6``, ``ordered_list1`` ...
``ordered_list6``). A ``generic_list`` node holds a flat run of sibling
items; items nested below an item are children of that item. This module
turns those runs back into nested list blocks.

A run is consumed by :meth:`ListBuilder.build_level` until it meets an item
of another list type or a shallower item. An item deeper than the current
level without a parent item in between is wrapped in single-entry lists for
every level it skips.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from norg2ast.constants import ORDERED_LIST_KINDS, UNORDERED_LIST_KINDS
from norg2ast.ir.nodes import Block, BulletList, ListEntry, NullBlock, OrderedList, Span

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["ListType", "ListExit", "ListBuildResult", "ListBuilder", "handle_lists", "list_kind", "make_list"]


class ListType(Enum):
    """Type of a list being built; ``UNKNOWN`` until its first item is seen."""

    UNKNOWN = "unknown"
    ORDERED = "ordered"
    UNORDERED = "unordered"


class ListExit(Enum):
    """Why :meth:`ListBuilder.build_level` stopped."""

    END_OF_NODES = "end_of_nodes"
    LEVEL_IS_HIGHER = "level_is_higher"
    TYPE_MISMATCH = "type_mismatch"


@dataclass
class ListBuildResult:
    block: Block
    list_type: ListType
    exit: ListExit


def list_kind(kind: str) -> tuple[ListType, int] | None:
    """Return the list type and zero-based level encoded in a node kind.

    Examples
    --------
    >>> list_kind("ordered_list3")
    (<ListType.ORDERED: 'ordered'>, 2)
    >>> list_kind("paragraph") is None
    True

    """
    if kind in UNORDERED_LIST_KINDS:
        return ListType.UNORDERED, UNORDERED_LIST_KINDS[kind]
    if kind in ORDERED_LIST_KINDS:
        return ListType.ORDERED, ORDERED_LIST_KINDS[kind]
    return None


def make_list(list_type: ListType, entries: list[ListEntry]) -> Block:
    """Create the list block for ``list_type``; an unknown type yields a ``NullBlock``.

    The list spans from the start of its first entry to the end of its last.
    """
    spans = [entry.span for entry in entries if entry.span is not None]
    span = spans[0].join(spans[-1]) if spans else None
    if list_type is ListType.UNORDERED:
        return BulletList(entries, span=span)
    if list_type is ListType.ORDERED:
        return OrderedList(entries, span=span)
    return NullBlock()


class ListBuilder:
    """Build nested lists from the sibling run under the walker's cursor.

    Parameters
    ----------
    walker : NorgWalker
        Walker whose cursor is positioned on the first item of the run

    """

    def __init__(self, walker: NorgWalker):
        self.walker = walker

    def build_level(self, level: int) -> ListBuildResult:
        """Consume items of ``level`` (and their deeper siblings) into one list.

        On return the cursor is on the last consumed item when the run was
        exhausted, otherwise on the item that stopped the list.
        """
        cursor = self.walker.cursor
        list_type = ListType.UNKNOWN
        entries: list[ListEntry] = []
        exit_reason = ListExit.END_OF_NODES

        while True:
            node = cursor.node
            found = list_kind(node.type)

            if found is None:
                logger.error(f"Unknown list node: {node.type!r}")
                if not cursor.goto_next_sibling():
                    break
                continue

            item_type, item_level = found
            if list_type is ListType.UNKNOWN:
                list_type = item_type
            elif item_type is not list_type:
                exit_reason = ListExit.TYPE_MISMATCH
                break

            if item_level > level:
                nested = self.build_level(item_level)
                block = nested.block
                for _ in range(item_level - level - 1):
                    block = make_list(nested.list_type, [ListEntry([block], span=block.span)])
                entries.append(ListEntry([block], span=block.span))

                # the item that stopped the nested list has not been consumed yet
                if nested.exit is not ListExit.END_OF_NODES:
                    continue
            elif item_level == level:
                entries.append(self.handle_entry(level))
            else:
                exit_reason = ListExit.LEVEL_IS_HIGHER
                break

            if not cursor.goto_next_sibling():
                break

        if not entries:
            return ListBuildResult(NullBlock(), ListType.UNKNOWN, exit_reason)
        return ListBuildResult(make_list(list_type, entries), list_type, exit_reason)

    def handle_entry(self, level: int) -> ListEntry:
        """Convert the content of the item under the cursor into a list entry."""
        walker = self.walker
        document = walker.document
        span = Span.of(walker.cursor.node)
        document.push_scope()

        def visit() -> None:
            kind = walker.cursor.node.type
            if kind.endswith("_prefix"):
                return
            if list_kind(kind) is not None:
                self._handle_nested(level + 1)
            elif kind == "paragraph":
                walker.handle_paragraph()
            elif kind == "detached_modifier_extension":
                walker.handle_detached_ext()
            else:
                logger.error(f"Unknown list entry child: {kind!r}")

        walker.visit_children(visit)
        return ListEntry(document.pop_scope(), span=span)

    def _handle_nested(self, level: int) -> None:
        while True:
            result = self.build_level(level)
            if not isinstance(result.block, NullBlock):
                self.walker.document.add_block(result.block)
            if result.exit is ListExit.LEVEL_IS_HIGHER:
                logger.error(f"List item shallower than level {level + 1} inside a list entry")
            if result.exit is not ListExit.TYPE_MISMATCH:
                break


def handle_lists(walker: NorgWalker) -> None:
    """Add one block per list found in a ``generic_list`` node."""
    logger.debug("Parsing list")
    cursor = walker.cursor
    if not cursor.goto_first_child():
        return

    builder = ListBuilder(walker)
    while True:
        result = builder.build_level(0)
        walker.document.add_block(result.block)
        if result.exit is ListExit.END_OF_NODES:
            break

    cursor.goto_parent()
