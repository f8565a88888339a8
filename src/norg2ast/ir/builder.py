#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/ir/builder.py
"""Accumulation of IR blocks during the tree walk.

:class:`DocumentBuilder` is the sink every node handler writes into. It keeps
a stack of open block sequences (scopes), one per container being built (the
document root, a list entry, a quote level, a table cell, a definition), and
an inline collector for inlines that do not belong to a block yet (TODO
status markers, for example).

:class:`DocumentContext` holds the cross-reference registries. Handlers write
to it during the walk; :mod:`norg2ast.ir.emit` only reads from it.

"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from norg2ast.ast.nodes import Document
from norg2ast.exceptions import ScopeError
from norg2ast.ir.emit import emit_document
from norg2ast.ir.nodes import Block, DocumentLinkKind, Inline, LinkTarget, Plain

logger = logging.getLogger(__name__)


class DocumentContext:
    """Anchor and document-link registries of one conversion.

    Both registries are last-write-wins.

    Attributes
    ----------
    anchors : dict[str, LinkTarget]
        Anchor name to the target it was defined with
    document_links : dict[str, dict[DocumentLinkKind, str]]
        Reference text to the identifier of each kind of element with that text

    """

    def __init__(self) -> None:
        self.anchors: dict[str, LinkTarget] = {}
        self.document_links: dict[str, dict[DocumentLinkKind, str]] = {}

    def register_anchor(self, name: str, target: LinkTarget) -> None:
        if name in self.anchors:
            logger.debug(f"Anchor {name!r} redefined")
        self.anchors[name] = target

    def get_anchor(self, name: str) -> Optional[LinkTarget]:
        return self.anchors.get(name)

    def register_document_link(self, text: str, kind: DocumentLinkKind, identifier: str) -> None:
        self.document_links.setdefault(text, {})[kind] = identifier

    def get_document_link(self, text: str, kind: DocumentLinkKind) -> Optional[str]:
        identifier = self.document_links.get(text, {}).get(kind)
        logger.debug(f"Fetching link for {text!r} (kind: {kind}) = {identifier!r}")
        return identifier


class DocumentBuilder:
    """Scope stack, inline collector and metadata of a document under construction.

    The root scope exists from construction and must be the only scope left
    when :meth:`build` is called.

    Parameters
    ----------
    context : DocumentContext, optional
        Registries to write cross-references into. A fresh context is
        created when omitted.

    Examples
    --------
    >>> from norg2ast.ir.nodes import ParagraphBlock, Str, ListEntry, BulletList
    >>> builder = DocumentBuilder()
    >>> builder.push_scope()
    >>> builder.add_block(ParagraphBlock([[Str("item")]]))
    >>> entry = ListEntry(builder.pop_scope())
    >>> builder.add_block(BulletList([entry]))
    >>> len(builder.build().children)
    1

    """

    def __init__(self, context: Optional[DocumentContext] = None) -> None:
        self.context = context if context is not None else DocumentContext()
        self._scopes: list[list[Block]] = [[]]
        self._inline_collector: list[Inline] = []
        self._metadata: dict[str, Any] = {}

    @property
    def depth(self) -> int:
        """Number of open scopes, the root included."""
        return len(self._scopes)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata

    @property
    def pending_inlines(self) -> list[Inline]:
        return list(self._inline_collector)

    def push_scope(self) -> None:
        """Open a new scope; blocks are added to it until it is popped."""
        self._scopes.append([])

    def pop_scope(self) -> list[Block]:
        """Close the innermost scope and return its blocks.

        A non-empty inline collector is flushed into the scope as a final
        ``Plain`` block before it is closed.

        Raises
        ------
        ScopeError
            If only the root scope is open
        """
        if len(self._scopes) <= 1:
            raise ScopeError("Tried to pop the root scope")
        scope = self._scopes.pop()
        if self._inline_collector:
            scope.append(Plain(self.take_inline_collector()))
        return scope

    def add_block(self, block: Block) -> DocumentBuilder:
        """Append ``block`` to the innermost scope.

        A non-empty inline collector is flushed first as one ``Plain``
        block, so floating inlines land right before the block that follows
        them.
        """
        if not self._scopes:
            raise ScopeError("All scopes were popped")
        scope = self._scopes[-1]
        if self._inline_collector:
            scope.append(Plain(self.take_inline_collector()))
        scope.append(block)
        return self

    def push_inline(self, inline: Inline) -> None:
        """Add an inline to the collector."""
        self._inline_collector.append(inline)

    def take_inline_collector(self) -> list[Inline]:
        """Return the collected inlines and reset the collector."""
        inlines, self._inline_collector = self._inline_collector, []
        return inlines

    def register_anchor(self, name: str, target: LinkTarget) -> None:
        self.context.register_anchor(name, target)

    def register_document_link(self, text: str, kind: DocumentLinkKind, identifier: str) -> None:
        self.context.register_document_link(text, kind, identifier)

    def extend_metadata(self, pairs: dict[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Merge metadata entries; an existing key is replaced."""
        self._metadata.update(pairs)

    def build(self) -> Document:
        """Emit the finished document.

        Returns
        -------
        Document
            The emitted AST, with any inlines still in the collector appended
            as a final plain paragraph

        Raises
        ------
        ScopeError
            If a scope other than the root is still open
        """
        if len(self._scopes) != 1:
            raise ScopeError(f"Only the root scope should remain, found {len(self._scopes)} scopes")

        blocks = list(self._scopes[0])
        if self._inline_collector:
            blocks.append(Plain(self.take_inline_collector()))

        logger.debug(f"Emitting {len(blocks)} top-level blocks")
        return emit_document(blocks, self._metadata, self.context)
