#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for AST JSON serialization and the AST visitors."""

import json

import pytest
from utils import convert, definition, document, generic_list, heading, list_item, modifier, paragraph, segment

from norg2ast.ast import (
    Code,
    Document,
    Heading,
    Link,
    OutlineCollector,
    Paragraph,
    SourceLocation,
    Strong,
    Text,
    TextCollector,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    extract_text,
    get_node_children,
    json_to_ast,
)
from norg2ast.ast.serialization import SCHEMA_VERSION
from norg2ast.cst import node


@pytest.fixture
def converted() -> Document:
    tree = document(
        heading(1, "Intro", paragraph(segment("Some ", modifier("bold", "bold"), " text"))),
        generic_list(list_item(1, "✅ done")),
        node("definition_list", definition("Term", "Meaning")),
    )
    return convert(tree)


@pytest.mark.unit
class TestJsonSerialization:
    """Test JSON output of converted documents."""

    def test_schema_version(self, converted: Document) -> None:
        data = json.loads(ast_to_json(converted))

        assert data["schema_version"] == SCHEMA_VERSION
        assert data["node_type"] == "Document"

    def test_round_trip(self, converted: Document) -> None:
        restored = json_to_ast(ast_to_json(converted, indent=2))

        assert restored == converted

    def test_unicode_kept(self, converted: Document) -> None:
        assert "✅" in ast_to_json(converted)

    def test_definition_items_layout(self, converted: Document) -> None:
        data = ast_to_dict(converted.children[-1])

        assert data["node_type"] == "DefinitionList"
        assert data["items"][0]["term"]["node_type"] == "DefinitionTerm"
        assert data["items"][0]["descriptions"][0]["node_type"] == "DefinitionDescription"

    def test_heading_identifier_serialized(self, converted: Document) -> None:
        assert ast_to_dict(converted.children[0])["identifier"] == "Intro"

    def test_source_location_round_trip(self) -> None:
        location = SourceLocation(line=3, column=0)
        heading = Heading(level=1, content=[Text(content="Intro")], identifier="Intro", source_location=location)

        data = ast_to_dict(heading)

        assert data["source_location"] == {
            "node_type": "SourceLocation",
            "format": "norg",
            "line": 3,
            "column": 0,
            "end_line": None,
            "end_column": None,
            "start_byte": None,
            "end_byte": None,
            "metadata": {},
        }
        assert dict_to_ast(data).source_location == location

    def test_converted_locations_survive_json(self, converted: Document) -> None:
        assert ast_to_dict(converted.children[0])["source_location"]["start_byte"] == 0

        restored = json_to_ast(ast_to_json(converted))

        assert restored.children[1].source_location == converted.children[1].source_location
        assert restored.children[2].items[0].source_location.line == 2

    def test_missing_source_location_omitted(self) -> None:
        assert "source_location" not in ast_to_dict(Text(content="x"))

    def test_metadata_not_interpreted(self) -> None:
        """Metadata values shaped like nodes stay plain data."""
        doc = Document(metadata={"fake": {"node_type": "Text", "content": "x"}})

        restored = json_to_ast(ast_to_json(doc))

        assert restored.metadata == {"fake": {"node_type": "Text", "content": "x"}}

    def test_unsupported_schema_version(self) -> None:
        payload = json.dumps({"schema_version": 99, "node_type": "Document", "children": [], "metadata": {}})

        with pytest.raises(ValueError, match="Unsupported schema version"):
            json_to_ast(payload)

        assert json_to_ast(payload, validate_schema=False) == Document()

    def test_unknown_node_type(self) -> None:
        data = {"node_type": "Footnote", "content": "x"}

        with pytest.raises(ValueError, match="Unknown node type"):
            dict_to_ast(data)

        assert dict_to_ast(data, strict_mode=False) == Text(content="")

    def test_unknown_field(self) -> None:
        data = {"node_type": "Text", "content": "x", "colour": "red"}

        with pytest.raises(ValueError, match="Unknown field 'colour'"):
            dict_to_ast(data)

        assert dict_to_ast(data, strict_mode=False) == Text(content="x")


@pytest.mark.unit
class TestVisitors:
    """Test traversal helpers."""

    def test_extract_text(self, converted: Document) -> None:
        assert extract_text(converted.children[1]) == "Some bold text"

    def test_text_collector_includes_code(self) -> None:
        collector = TextCollector()
        Paragraph(content=[Text(content="run "), Code(content="ls")]).accept(collector)

        assert collector.text == "run ls"

    def test_outline_collector(self) -> None:
        doc = Document(
            children=[
                Heading(level=1, content=[Text(content="Top")], identifier="Top"),
                Paragraph(content=[Link(url="#Top", content=[Text(content="back")])]),
                Heading(level=2, content=[Strong(content=[Text(content="Sub")])], identifier="Sub"),
            ]
        )
        collector = OutlineCollector()

        doc.accept(collector)

        assert collector.headings == [(1, "Top", "Top"), (2, "Sub", "Sub")]

    def test_node_children(self, converted: Document) -> None:
        children = get_node_children(converted)

        assert children == converted.children
