#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/parsers/_norg_tables.py
"""Table handling for the norg walker.

Single table cells carry a spreadsheet-style location such as ``A1`` or
``AC21``: letters name the row in base 26 (``A`` = 1 ... ``Z`` = 26, most
significant letter first), digits name the column. Both are zero-based once
parsed. Cells may appear in any order; the grid grows on demand.

``@table`` verbatim blocks use one line per row with ``|`` separated cells,
the first line being the header.

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from norg2ast.exceptions import InvalidLocationError
from norg2ast.ir.nodes import Block, Cell, Plain, Row, Span, Str, TableBlock

if TYPE_CHECKING:
    from norg2ast.parsers.norg import NorgWalker

logger = logging.getLogger(__name__)

__all__ = ["parse_row", "parse_table_location", "handle_table", "parse_pipe_table"]

_SKIPPED_CELL_KINDS = frozenset({"single_table_cell_prefix", "_intersecting_modifier"})


class _LocationState(Enum):
    START = "start"
    ROW = "row"
    COLUMN = "column"


def parse_row(letters: str) -> int:
    """Convert row letters to a zero-based row index.

    Examples
    --------
    >>> parse_row("A"), parse_row("Z"), parse_row("AA")
    (0, 25, 26)

    """
    accum = 0
    for char in letters:
        accum = accum * 26 + (ord(char) - ord("A") + 1)
    return accum - 1


def parse_table_location(text: str) -> tuple[int, int]:
    """Parse a cell location into ``(row, column)``.

    Parameters
    ----------
    text : str
        Location made of uppercase row letters followed by a column number
        without leading zero

    Returns
    -------
    tuple of (int, int)
        Zero-based row and column

    Raises
    ------
    InvalidLocationError
        If ``text`` is not letters followed by digits

    Examples
    --------
    >>> parse_table_location("C1")
    (2, 0)
    >>> parse_table_location("AC21")
    (28, 20)

    """
    state = _LocationState.START
    row = col = 0
    pos = 0

    while pos < len(text):
        char = text[pos]
        end = pos
        if "A" <= char <= "Z":
            if state is not _LocationState.START:
                raise InvalidLocationError(text)
            while end < len(text) and "A" <= text[end] <= "Z":
                end += 1
            row = parse_row(text[pos:end])
            state = _LocationState.ROW
        elif "1" <= char <= "9":
            if state is not _LocationState.ROW:
                raise InvalidLocationError(text)
            while end < len(text) and text[end].isdigit() and text[end].isascii():
                end += 1
            col = int(text[pos:end]) - 1
            state = _LocationState.COLUMN
        else:
            raise InvalidLocationError(text)
        pos = end

    if state is not _LocationState.COLUMN:
        raise InvalidLocationError(text)
    return row, col


def _pad_rows(rows: list[Row], num_cols: int) -> None:
    for row in rows:
        while len(row) < num_cols:
            row.append(Cell())


def _handle_single_cell(walker: NorgWalker) -> tuple[tuple[int, int], list[Block]] | None:
    location: tuple[int, int] | None = None
    blocks: list[Block] = []

    def visit() -> None:
        nonlocal location, blocks
        cursor = walker.cursor
        node = cursor.node

        if cursor.field_id == walker.field_ids.title:
            text = walker.node_text(node).strip()
            try:
                location = parse_table_location(text)
            except InvalidLocationError as e:
                if walker.options.strict:
                    raise
                logger.warning(f"{e}, skipping cell")
        elif cursor.field_id == walker.field_ids.content:
            walker.document.push_scope()
            walker.handle_node()
            blocks = walker.document.pop_scope()
        elif node.type in _SKIPPED_CELL_KINDS:
            pass
        else:
            logger.error(f"Unknown table cell child: {node.type!r}")

    walker.visit_children(visit)

    if location is None:
        return None
    return location, blocks


def handle_table(walker: NorgWalker) -> None:
    """Assemble the ``single_table_cell`` children of a table node."""
    logger.debug("Parsing table")
    span = Span.of(walker.cursor.node)
    rows: list[Row] = []
    num_cols = 0

    def visit() -> None:
        nonlocal num_cols
        node = walker.cursor.node
        if node.type != "single_table_cell":
            logger.error(f"Unknown table child: {node.type!r}")
            return

        cell = _handle_single_cell(walker)
        if cell is None:
            return

        (row, col), blocks = cell
        while len(rows) <= row:
            rows.append([])
        target = rows[row]
        while len(target) <= col:
            target.append(Cell())
        target[col] = Cell(blocks, span=Span.of(node))
        num_cols = max(num_cols, col + 1)

    walker.visit_children(visit)

    _pad_rows(rows, num_cols)
    walker.document.add_block(TableBlock(num_cols, [], rows, span=span))


def parse_pipe_table(text: str) -> TableBlock:
    """Build a table from ``|`` separated lines; the first line is the header.

    Blank lines are skipped. Each cell holds its trimmed text.

    Examples
    --------
    >>> table = parse_pipe_table("a | b\\n1 | 2")
    >>> table.num_cols, len(table.header), len(table.rows)
    (2, 2, 1)

    """
    parsed: list[Row] = []
    num_cols = 0

    for line in text.splitlines():
        if not line.strip():
            continue
        row: Row = []
        for column in line.split("|"):
            content = column.strip()
            row.append(Cell([Plain([Str(content)])] if content else []))
        num_cols = max(num_cols, len(row))
        parsed.append(row)

    _pad_rows(parsed, num_cols)
    if not parsed:
        return TableBlock(0)
    return TableBlock(num_cols, parsed[0], parsed[1:])
