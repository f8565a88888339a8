#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the document builder and the cross-reference registries."""

import pytest

from norg2ast.ast import Document, Paragraph, Text
from norg2ast.exceptions import ScopeError
from norg2ast.ir import DocumentBuilder, DocumentContext
from norg2ast.ir.nodes import (
    BulletList,
    DirectTarget,
    DocumentLinkKind,
    FileTarget,
    ListEntry,
    ParagraphBlock,
    Plain,
    Str,
)


@pytest.mark.unit
class TestScopeStack:
    """Test opening and closing of block scopes."""

    def test_root_scope_is_open(self) -> None:
        """A new builder has exactly the root scope."""
        assert DocumentBuilder().depth == 1

    def test_pop_returns_scope_blocks(self) -> None:
        """Blocks added after a push are returned by the matching pop."""
        builder = DocumentBuilder()
        builder.push_scope()
        builder.add_block(ParagraphBlock([[Str("item")]]))

        blocks = builder.pop_scope()

        assert blocks == [ParagraphBlock([[Str("item")]])]
        assert builder.depth == 1

    def test_pop_root_scope_raises(self) -> None:
        """The root scope cannot be popped."""
        with pytest.raises(ScopeError):
            DocumentBuilder().pop_scope()

    def test_build_with_open_scope_raises(self) -> None:
        """Building while a nested scope is open is a handler bug."""
        builder = DocumentBuilder()
        builder.push_scope()

        with pytest.raises(ScopeError, match="2 scopes"):
            builder.build()

    def test_nested_scopes(self) -> None:
        """Scopes nest; an inner scope's blocks do not leak outward."""
        builder = DocumentBuilder()
        builder.push_scope()
        builder.push_scope()
        builder.add_block(ParagraphBlock([[Str("inner")]]))
        inner = builder.pop_scope()
        builder.add_block(BulletList([ListEntry(inner)]))
        outer = builder.pop_scope()

        assert len(outer) == 1
        assert isinstance(outer[0], BulletList)
        assert builder.build().children == []

    def test_add_block_is_chainable(self) -> None:
        """add_block returns the builder itself."""
        builder = DocumentBuilder()
        result = builder.add_block(ParagraphBlock([[Str("a")]])).add_block(ParagraphBlock([[Str("b")]]))

        assert result is builder
        assert len(builder.build().children) == 2


@pytest.mark.unit
class TestInlineCollector:
    """Test the collector of floating inlines."""

    def test_collector_flushed_before_next_block(self) -> None:
        """Pending inlines become one plain paragraph right before the next block."""
        builder = DocumentBuilder()
        builder.push_inline(Str("✅"))
        builder.add_block(ParagraphBlock([[Str("text")]]))

        doc = builder.build()

        assert doc.children == [
            Paragraph(content=[Text(content="✅")], metadata={"plain": True}),
            Paragraph(content=[Text(content="text")]),
        ]

    def test_collector_flushed_into_current_scope(self) -> None:
        """The flushed plain block lands in the innermost scope."""
        builder = DocumentBuilder()
        builder.push_scope()
        builder.push_inline(Str("x"))
        builder.add_block(ParagraphBlock([[Str("y")]]))

        blocks = builder.pop_scope()

        assert blocks == [Plain([Str("x")]), ParagraphBlock([[Str("y")]])]

    def test_collector_flushed_into_popped_scope(self) -> None:
        """Inlines pending when a scope closes stay inside that scope."""
        builder = DocumentBuilder()
        builder.push_scope()
        builder.push_inline(Str("⬜"))

        blocks = builder.pop_scope()

        assert blocks == [Plain([Str("⬜")])]
        assert builder.pending_inlines == []

    def test_take_resets_collector(self) -> None:
        """Taking the collector returns its inlines and empties it."""
        builder = DocumentBuilder()
        builder.push_inline(Str("a"))

        assert builder.take_inline_collector() == [Str("a")]
        assert builder.pending_inlines == []

    def test_trailing_collector_emitted_on_build(self) -> None:
        """Inlines still pending at the end become a final plain paragraph."""
        builder = DocumentBuilder()
        builder.push_inline(Str("⬜"))

        doc = builder.build()

        assert len(doc.children) == 1
        assert doc.children[0].is_plain
        assert doc.children[0].content == [Text(content="⬜")]


@pytest.mark.unit
class TestMetadata:
    """Test metadata accumulation."""

    def test_extend_metadata_last_write_wins(self) -> None:
        """Later entries replace earlier ones with the same key."""
        builder = DocumentBuilder()
        builder.extend_metadata({"title": "First", "author": "alice"})
        builder.extend_metadata([("title", "Second")])

        assert builder.build().metadata == {"title": "Second", "author": "alice"}

    def test_build_copies_metadata(self) -> None:
        """The emitted document does not share the builder's metadata dict."""
        builder = DocumentBuilder()
        builder.extend_metadata({"a": "1"})
        doc = builder.build()
        builder.extend_metadata({"b": "2"})

        assert doc.metadata == {"a": "1"}


@pytest.mark.unit
class TestDocumentContext:
    """Test the anchor and document-link registries."""

    def test_anchor_lookup(self) -> None:
        """Registered anchors are returned; unknown anchors are None."""
        context = DocumentContext()
        context.register_anchor("docs", DirectTarget("https://example.com"))

        assert context.get_anchor("docs") == DirectTarget("https://example.com")
        assert context.get_anchor("missing") is None

    def test_anchor_redefinition_last_write_wins(self) -> None:
        """Redefining an anchor replaces its target."""
        context = DocumentContext()
        context.register_anchor("a", DirectTarget("https://one"))
        context.register_anchor("a", FileTarget("two.txt"))

        assert context.get_anchor("a") == FileTarget("two.txt")

    def test_document_links_keyed_by_kind(self) -> None:
        """The same text is registered separately per heading level."""
        context = DocumentContext()
        context.register_document_link("Intro", DocumentLinkKind(1), "Intro")
        context.register_document_link("Intro", DocumentLinkKind(2), "Intro~0")

        assert context.get_document_link("Intro", DocumentLinkKind(1)) == "Intro"
        assert context.get_document_link("Intro", DocumentLinkKind(2)) == "Intro~0"
        assert context.get_document_link("Intro", DocumentLinkKind(3)) is None

    def test_builder_writes_through_to_context(self) -> None:
        """Registrations on the builder go to its context."""
        context = DocumentContext()
        builder = DocumentBuilder(context)
        builder.register_anchor("a", DirectTarget("u"))
        builder.register_document_link("T", DocumentLinkKind(1), "T")

        assert context.get_anchor("a") == DirectTarget("u")
        assert context.get_document_link("T", DocumentLinkKind(1)) == "T"

    @pytest.mark.parametrize("level", [0, 7])
    def test_link_kind_level_bounds(self, level: int) -> None:
        """Heading link kinds only exist for levels 1-6."""
        with pytest.raises(ValueError):
            DocumentLinkKind(level)


@pytest.mark.unit
def test_empty_builder_builds_empty_document() -> None:
    """An untouched builder emits an empty document."""
    assert DocumentBuilder().build() == Document()
