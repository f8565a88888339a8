#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for table cell locations and table assembly."""

import pytest
from utils import convert, document, table_cell, verbatim_tag

from norg2ast.ast import Paragraph, Table, Text
from norg2ast.cst import node, token
from norg2ast.exceptions import InvalidLocationError, ParsingError
from norg2ast.ir.nodes import Cell, Plain, Str
from norg2ast.parsers._norg_tables import parse_pipe_table, parse_row, parse_table_location


def cell_text(cell) -> str:
    """Text of a cell holding a single paragraph, or "" for an empty cell."""
    if not cell.content:
        return ""
    return cell.content[0].content[0].content


def grid(table: Table) -> list[list[str]]:
    return [[cell_text(cell) for cell in row.cells] for row in table.rows]


@pytest.mark.unit
class TestParseRow:
    """Test base-26 row letters."""

    @pytest.mark.parametrize(
        "letters,expected",
        [("A", 0), ("B", 1), ("Z", 25), ("AA", 26), ("AC", 28), ("AZ", 51), ("BA", 52), ("ABC", 730)],
    )
    def test_row_letters(self, letters: str, expected: int) -> None:
        assert parse_row(letters) == expected


@pytest.mark.unit
class TestParseTableLocation:
    """Test spreadsheet-style location parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("A1", (0, 0)),
            ("C1", (2, 0)),
            ("B10", (1, 9)),
            ("AC21", (28, 20)),
            ("ABC1", (730, 0)),
        ],
    )
    def test_valid_locations(self, text: str, expected: tuple[int, int]) -> None:
        assert parse_table_location(text) == expected

    @pytest.mark.parametrize("text", ["1C", "C1C", ".?;", "", "C", "C0", "c1", "A 1", "A01"])
    def test_invalid_locations(self, text: str) -> None:
        with pytest.raises(InvalidLocationError) as exc_info:
            parse_table_location(text)

        assert exc_info.value.location == text
        assert exc_info.value.parsing_stage == "table"

    def test_invalid_location_is_parsing_error(self) -> None:
        with pytest.raises(ParsingError):
            parse_table_location("1C")


@pytest.mark.unit
class TestTableAssembly:
    """Test building tables from single cells."""

    def test_cells_placed_by_location(self) -> None:
        """Cells may come in any order; missing cells are empty."""
        tree = document(node("table", table_cell("B2", "d"), table_cell("A1", "a"), table_cell("A2", "b")))

        table = convert(tree).children[0]

        assert isinstance(table, Table)
        assert table.header is None
        assert table.num_cols == 2
        assert grid(table) == [["a", "b"], ["", "d"]]

    def test_rows_padded_to_widest(self) -> None:
        tree = document(node("table", table_cell("A3", "wide"), table_cell("B1", "narrow")))

        table = convert(tree).children[0]

        assert grid(table) == [["", "", "wide"], ["narrow", "", ""]]

    def test_same_location_overwritten(self) -> None:
        tree = document(node("table", table_cell("A1", "old"), table_cell("A1", "new")))

        assert grid(convert(tree).children[0]) == [["new"]]

    def test_cell_content_is_paragraph(self) -> None:
        table = convert(document(node("table", table_cell("A1", "two words")))).children[0]

        assert table.rows[0].cells[0].content == [Paragraph(content=[Text(content="two words")])]

    def test_invalid_location_skipped(self, norg_logs: pytest.LogCaptureFixture) -> None:
        tree = document(node("table", table_cell("1C", "lost"), table_cell("A1", "kept")))

        table = convert(tree).children[0]

        assert grid(table) == [["kept"]]
        assert "Invalid table cell location: '1C', skipping cell" in norg_logs.text

    def test_invalid_location_strict(self) -> None:
        tree = document(node("table", table_cell("1C", "lost")))

        with pytest.raises(InvalidLocationError):
            convert(tree, strict=True)

    def test_unknown_table_child_logged(self, norg_logs: pytest.LogCaptureFixture) -> None:
        tree = document(node("table", table_cell("A1", "x"), node("oddity", token("_word", "y"))))

        assert grid(convert(tree).children[0]) == [["x"]]
        assert "Unknown table child: 'oddity'" in norg_logs.text

    def test_empty_table(self) -> None:
        table = convert(document(node("table"))).children[0]

        assert table.rows == []
        assert table.num_cols == 0


@pytest.mark.unit
class TestPipeTable:
    """Test ``@table`` blocks."""

    def test_header_and_rows(self) -> None:
        table = parse_pipe_table("Name | Age\nalice | 30\nbob | 41\n")

        assert table.num_cols == 2
        assert table.header == [Cell([Plain([Str("Name")])]), Cell([Plain([Str("Age")])])]
        assert len(table.rows) == 2
        assert table.rows[1][0] == Cell([Plain([Str("bob")])])

    def test_short_rows_padded(self) -> None:
        table = parse_pipe_table("a | b\n1 | 2 | 3")

        assert table.num_cols == 3
        assert len(table.header) == 3
        assert table.header[2] == Cell()

    def test_blank_lines_and_empty_cells(self) -> None:
        table = parse_pipe_table("\na |  | c\n\n")

        assert table.header == [Cell([Plain([Str("a")])]), Cell(), Cell([Plain([Str("c")])])]
        assert table.rows == []

    def test_empty_text(self) -> None:
        table = parse_pipe_table("   \n")

        assert table.num_cols == 0
        assert table.header == []

    def test_table_tag_emits_header(self) -> None:
        doc = convert(document(verbatim_tag("table", "x | y\n1 | 2\n")))

        table = doc.children[0]
        assert isinstance(table, Table)
        assert table.header is not None
        assert [cell_text(cell) for cell in table.header.cells] == ["x", "y"]
        assert grid(table) == [["1", "2"]]
        assert table.header.cells[0].content[0].is_plain
