#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for inline markup, links and anchors."""

import pytest
from utils import (
    convert,
    document,
    heading,
    link,
    link_description,
    link_location,
    modifier,
    paragraph,
    segment,
)

from norg2ast.ast import (
    Code,
    Emphasis,
    Link,
    MathInline,
    Paragraph,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Text,
    Underline,
)
from norg2ast.cst import node, token
from norg2ast.parsers._norg_inlines import link_text


def inlines_of(*parts) -> list:
    """Convert a one-line paragraph and return its inline content."""
    doc = convert(document(paragraph(segment(*parts))))
    assert len(doc.children) == 1
    return doc.children[0].content


def link_of(*parts) -> Link:
    return next(inline for inline in inlines_of(*parts) if isinstance(inline, Link))


@pytest.mark.unit
class TestText:
    """Test words, spaces and line handling."""

    def test_words_and_spaces(self) -> None:
        assert inlines_of("Hello brave world") == [Text(content="Hello brave world")]

    def test_lines_joined_with_space(self) -> None:
        doc = convert(document(paragraph("line one", "line two")))

        assert doc.children == [Paragraph(content=[Text(content="line one line two")])]

    def test_line_break_token_is_space(self) -> None:
        parts = (token("_word", "a"), token("_line_break", "\n"), token("_word", "b"))

        assert inlines_of(*parts) == [Text(content="a b")]

    def test_escape_sequence(self) -> None:
        escape = node("escape_sequence", token("_escape", "\\"), token("_char", "*", field="token"))

        assert inlines_of("a ", escape) == [Text(content="a *")]

    def test_tilde_trailing_modifier_ignored(self) -> None:
        parts = ("joined", token("_trailing_modifier", "~"))

        assert inlines_of(*parts) == [Text(content="joined")]

    def test_unknown_trailing_modifier_logged(self, norg_logs: pytest.LogCaptureFixture) -> None:
        inlines_of("x", token("_trailing_modifier", "^"))

        assert "Unknown trailing modifier '^'" in norg_logs.text

    def test_unknown_segment_logged(self, norg_logs: pytest.LogCaptureFixture) -> None:
        assert inlines_of("kept ", node("sparkle", token("_word", "x"))) == [Text(content="kept ")]
        assert "Unknown segment: 'sparkle'" in norg_logs.text


@pytest.mark.unit
class TestAttachedModifiers:
    """Test formatting wrappers."""

    @pytest.mark.parametrize(
        "kind,delimiter,expected",
        [
            ("bold", "*", Strong),
            ("italic", "/", Emphasis),
            ("underline", "_", Underline),
            ("strikethrough", "-", Strikethrough),
            ("superscript", "^", Superscript),
            ("subscript", ",", Subscript),
        ],
    )
    def test_wrappers(self, kind: str, delimiter: str, expected: type) -> None:
        result = inlines_of("a ", modifier(kind, "b c", delimiter=delimiter))

        assert result == [Text(content="a "), expected(content=[Text(content="b c")])]

    def test_nested_wrappers(self) -> None:
        inner = modifier("italic", "deep", delimiter="/")

        result = inlines_of(modifier("bold", "very ", inner, delimiter="*"))

        assert result == [Strong(content=[Text(content="very "), Emphasis(content=[Text(content="deep")])])]

    def test_free_form_delimiters_skipped(self) -> None:
        bold = node("bold", token("free_form_open", "*|"), token("_word", "x"), token("free_form_close", "|*"))

        assert inlines_of(bold) == [Strong(content=[Text(content="x")])]

    def test_verbatim_keeps_source(self) -> None:
        """Verbatim content is the raw source between the delimiters."""
        verbatim = modifier("verbatim", "a  *b*", delimiter="`")

        assert inlines_of(verbatim) == [Code(content="a  *b*")]

    def test_inline_math(self) -> None:
        math = modifier("inline_math", "x^2 + 1", delimiter="$")

        assert inlines_of("so ", math) == [Text(content="so "), MathInline(content="x^2 + 1")]


@pytest.mark.unit
class TestLinks:
    """Test links and their targets."""

    def test_url_with_description(self) -> None:
        result = link_of(link(link_location("link_target_url", "https://example.com"), "Example site"))

        assert result == Link(url="https://example.com", content=[Text(content="Example site")])

    def test_url_without_description_shows_target(self) -> None:
        result = link_of(link(link_location("link_target_url", "https://example.com")))

        assert result.content == [Text(content="https://example.com")]

    def test_external_file(self) -> None:
        result = link_of(link(link_location("link_target_external_file", "/tmp/notes.txt", "/")))

        assert result.url == "/tmp/notes.txt"

    def test_heading_link(self) -> None:
        tree = document(
            heading(1, "Getting started"),
            paragraph(segment(link(link_location("link_target_heading1", "Getting started", "*"), "start"))),
        )

        para = convert(tree).children[1]

        assert para.content == [Link(url="#Getting-started", content=[Text(content="start")])]

    def test_heading_link_before_heading(self) -> None:
        """Links may point at headings further down the document."""
        tree = document(
            paragraph(segment(link(link_location("link_target_heading2", "Later", "**")))),
            heading(2, "Later"),
        )

        assert convert(tree).children[0].content[0].url == "#Later"

    def test_heading_link_wrong_level(self, norg_logs: pytest.LogCaptureFixture) -> None:
        tree = document(
            heading(1, "Only level one"),
            paragraph(segment(link(link_location("link_target_heading2", "Only level one", "**")))),
        )

        assert convert(tree).children[1].content[0].url == ""
        assert "Missing document link for 'Only level one'" in norg_logs.text

    def test_heading_link_resolves_to_deduplicated_identifier(self) -> None:
        tree = document(
            heading(1, "Notes"),
            heading(2, "Notes"),
            paragraph(segment(link(link_location("link_target_heading2", "Notes", "**")))),
        )

        assert convert(tree).children[2].content[0].url == "#Notes~0"

    def test_heading_link_whitespace_normalized(self) -> None:
        tree = document(
            heading(1, "Two words"),
            paragraph(segment(link(link_location("link_target_heading1", "Two\n   words", "*")))),
        )

        assert convert(tree).children[1].content[0].url == "#Two-words"

    def test_unknown_link_type(self, norg_logs: pytest.LogCaptureFixture) -> None:
        result = link_of(link(link_location("link_target_wiki", "Page", "?")))

        assert result.url == "Page"
        assert "Unknown link type: 'link_target_wiki'" in norg_logs.text

    def test_link_without_type(self, norg_logs: pytest.LogCaptureFixture) -> None:
        location = node("link_location", "{", token("link_destination", "somewhere", field="text"), "}")

        assert link_of(link(location)).url == "somewhere"
        assert "Link with no type" in norg_logs.text

    def test_formatted_description(self) -> None:
        description = node("link_description", "[", segment(modifier("bold", "big"), field="text"), "]")
        result = link_of(node("link", link_location("link_target_url", "https://x.org"), description))

        assert result.content == [Strong(content=[Text(content="big")])]


@pytest.mark.unit
class TestAnchors:
    """Test anchor declarations and definitions."""

    def test_definition_is_link(self) -> None:
        definition = node(
            "anchor_definition", link_description("docs"), link_location("link_target_url", "https://docs.example.com")
        )

        assert link_of(definition) == Link(url="https://docs.example.com", content=[Text(content="docs")])

    def test_declaration_before_definition(self) -> None:
        """An anchor used before its definition still resolves."""
        tree = document(
            paragraph(segment("see ", node("anchor_declaration", link_description("docs")))),
            paragraph(
                segment(
                    node(
                        "anchor_definition",
                        link_description("docs"),
                        link_location("link_target_url", "https://docs.example.com"),
                    )
                )
            ),
        )

        first, second = convert(tree).children

        docs_link = Link(url="https://docs.example.com", content=[Text(content="docs")])
        assert first.content == [Text(content="see "), docs_link]
        assert second.content[0].url == "https://docs.example.com"

    def test_anchor_to_heading(self) -> None:
        tree = document(
            heading(1, "Setup"),
            paragraph(segment(node("anchor_declaration", link_description("setup")))),
            paragraph(
                segment(
                    node(
                        "anchor_definition",
                        link_description("setup"),
                        link_location("link_target_heading1", "Setup", "*"),
                    )
                )
            ),
        )

        assert convert(tree).children[1].content[0].url == "#Setup"

    def test_undefined_anchor(self, norg_logs: pytest.LogCaptureFixture) -> None:
        tree = document(paragraph(segment(node("anchor_declaration", link_description("ghost")))))

        result = convert(tree).children[0].content[0]

        assert result == Link(url="", content=[Text(content="ghost")])
        assert "Missing anchor definition for 'ghost'" in norg_logs.text

    def test_anchor_name_whitespace_normalized(self) -> None:
        tree = document(
            paragraph(segment(node("anchor_declaration", link_description("my  anchor")))),
            paragraph(
                segment(
                    node(
                        "anchor_definition",
                        link_description("my anchor"),
                        link_location("link_target_url", "https://a.example"),
                    )
                )
            ),
        )

        assert convert(tree).children[0].content[0].url == "https://a.example"

    def test_definition_without_location(self, norg_logs: pytest.LogCaptureFixture) -> None:
        result = link_of(node("anchor_definition", link_description("lonely")))

        assert result.url == ""
        assert "Anchor definition 'lonely' without a location" in norg_logs.text


@pytest.mark.unit
def test_link_text_collapses_whitespace() -> None:
    assert link_text("  Getting\n  started ") == "Getting started"
    assert link_text("one") == "one"
