#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_quotes.py
"""Block quote merging for the norg walker.

Quote depth is encoded in the node kind (``quote1`` ... ``quote6``). The
merger keeps one pending block buffer per depth. When content arrives at a
shallower depth than the last one seen, the deeper buffers are folded into
nested quotes, one level at a time, before the content is appended.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from norg2ast.constants import MAX_NESTING_LEVEL, QUOTE_KINDS
from norg2ast.ir.nodes import Block, Plain, QuoteBlock, Span

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["QuoteMerger", "handle_quote"]


class QuoteMerger:
    """Merge a run of quote nodes into nested quote blocks.

    Parameters
    ----------
    walker : NorgWalker
        Walker whose cursor is positioned on the first quote node of the run

    """

    def __init__(self, walker: NorgWalker):
        self.walker = walker
        self.buffers: list[list[Block]] = [[] for _ in range(MAX_NESTING_LEVEL)]
        self.last_level = 0

    def parse(self) -> list[Block]:
        """Consume the run and return the blocks of the outermost quote."""
        cursor = self.walker.cursor
        while True:
            kind = cursor.node.type
            level = QUOTE_KINDS.get(kind)
            if level is None:
                logger.error(f"Unknown quote node: {kind!r}")
            else:
                self.handle_level(level)

            if not cursor.goto_next_sibling():
                break

        self.merge_up_to(0)
        blocks, self.buffers[0] = self.buffers[0], []
        return blocks

    def merge_up_to(self, level: int) -> None:
        """Fold every buffer deeper than ``level`` into its parent buffer."""
        depth = self.last_level
        while depth > level:
            self.buffers[depth - 1].append(QuoteBlock(self.buffers[depth]))
            self.buffers[depth] = []
            depth -= 1
        self.last_level = level

    def handle_level(self, level: int) -> None:
        walker = self.walker
        document = walker.document

        def visit() -> None:
            kind = walker.cursor.node.type
            nested = QUOTE_KINDS.get(kind)
            if nested is not None:
                self.flush_status(level)
                self.handle_level(nested)
            elif kind.endswith("_prefix"):
                pass
            elif kind == "paragraph":
                self.merge_up_to(level)
                document.push_scope()
                walker.handle_paragraph()
                self.buffers[level].extend(document.pop_scope())
            elif kind == "detached_modifier_extension":
                walker.handle_detached_ext()
            else:
                logger.error(f"Unknown quote child: {kind!r}")

        walker.visit_children(visit)
        self.flush_status(level)
        self.merge_up_to(level)

    def flush_status(self, level: int) -> None:
        """Move a status no paragraph picked up into the buffer of ``level``."""
        inlines = self.walker.document.take_inline_collector()
        if inlines:
            self.merge_up_to(level)
            self.buffers[level].append(Plain(inlines))


def handle_quote(walker: NorgWalker) -> None:
    logger.debug("Parsing quote")
    cursor = walker.cursor
    span = Span.of(cursor.node)
    if not cursor.goto_first_child():
        return

    blocks = QuoteMerger(walker).parse()
    walker.document.add_block(QuoteBlock(blocks, span=span))
    cursor.goto_parent()
