#  Copyright (c) 2025 Tom Villani, Ph.D.
"""End-to-end conversion tests for norg documents.

The syntax-tree tests run everywhere. Tests marked ``norg_grammar`` parse
real source text and are skipped unless tree-sitter and the norg grammar
are installed.
"""

import pytest
from utils import (
    definition,
    document,
    generic_list,
    heading,
    link,
    link_location,
    list_item,
    modifier,
    paragraph,
    quote,
    segment,
    table_cell,
    todo,
    verbatim_tag,
)

from norg2ast import tree_to_ast
from norg2ast.ast import (
    BlockQuote,
    CodeBlock,
    DefinitionList,
    Heading,
    List,
    Paragraph,
    Table,
    ast_to_json,
    extract_text,
    json_to_ast,
)
from norg2ast.cst import node
from norg2ast.parsers import NorgParser


@pytest.fixture
def notes_tree():
    """A project notes document touching every block kind."""
    return document(
        verbatim_tag("document.meta", "title: Project notes\ncategories: [\n  work\n  planning\n]\n"),
        heading(
            1,
            "Overview",
            paragraph(segment("Read the ", link(link_location("link_target_heading2", "Roadmap", "**"), "roadmap"))),
            generic_list(
                list_item(1, "Design", list_item(2, "Review API")),
                list_item(1, "Build"),
            ),
            node("quote", quote(1, "Ship early", quote(2, "and often"))),
            heading(
                2,
                "Roadmap",
                state=todo("pending"),
            ),
            node("table", table_cell("A1", "Milestone"), table_cell("A2", "Date"), table_cell("B1", "Beta")),
            node("definition_list", definition("Beta", "First public build")),
            verbatim_tag("code", "make release\n", "sh"),
        ),
        paragraph(segment(modifier("bold", "Done"))),
    )


@pytest.mark.integration
class TestSyntaxTreeConversion:
    """Convert a complete hand-built syntax tree."""

    def test_block_sequence(self, notes_tree) -> None:
        doc = tree_to_ast(notes_tree)

        assert [type(child) for child in doc.children] == [
            Heading,
            Paragraph,
            List,
            BlockQuote,
            Heading,
            Table,
            DefinitionList,
            CodeBlock,
            Paragraph,
        ]

    def test_metadata(self, notes_tree) -> None:
        doc = tree_to_ast(notes_tree)

        assert doc.metadata == {"title": "Project notes", "categories": ["work", "planning"]}

    def test_forward_heading_link(self, notes_tree) -> None:
        doc = tree_to_ast(notes_tree)

        roadmap_link = doc.children[1].content[1]
        assert roadmap_link.url == "#Roadmap"
        assert doc.children[4].identifier == "Roadmap"
        assert extract_text(doc.children[4]) == "⏳ Roadmap"

    def test_nested_list_and_quote(self, notes_tree) -> None:
        doc = tree_to_ast(notes_tree)

        design = doc.children[2].items[0]
        assert isinstance(design.children[-1], List)
        assert extract_text(design.children[-1]) == "Review API"
        assert len(doc.children[3].children) == 2

    def test_json_round_trip(self, notes_tree) -> None:
        doc = tree_to_ast(notes_tree)

        assert json_to_ast(ast_to_json(doc)) == doc


@pytest.mark.integration
@pytest.mark.norg_grammar
class TestSourceConversion:
    """Parse norg source text with the tree-sitter grammar."""

    @pytest.fixture(autouse=True)
    def _require_grammar(self) -> None:
        pytest.importorskip("tree_sitter")
        pytest.importorskip("tree_sitter_norg")

    def test_sample_document(self, sample_norg: str) -> None:
        doc = NorgParser().parse(sample_norg)

        assert doc.metadata.get("title") == "Sample Document"
        headings = [child for child in doc.children if isinstance(child, Heading)]
        assert headings[0].identifier == "Introduction"
        code_blocks = [child for child in doc.children if isinstance(child, CodeBlock)]
        assert any(block.language == "python" for block in code_blocks)

    def test_bytes_and_str_agree(self, sample_norg: str) -> None:
        from_str = NorgParser().parse(sample_norg)
        from_bytes = NorgParser().parse(sample_norg.encode("utf-8"))

        assert from_str == from_bytes

    def test_file_input(self, sample_norg: str, tmp_path) -> None:
        path = tmp_path / "sample.norg"
        path.write_text(sample_norg, encoding="utf-8")

        assert NorgParser().parse(path).metadata.get("title") == "Sample Document"
