"""Tests for the table sub-parser."""

import pytest

from md2adf.adapters.formatters.tables import (
    is_separator_row,
    is_table_row,
    parse_table,
    split_cells,
)
from md2adf.core.domain import Code, Paragraph, Text


def cell_texts(row):
    return [cell.content[0].content[0].text for cell in row.cells]


class TestRowPatterns:
    
    @pytest.mark.parametrize("line", [
        "|---|---|",
        "| --- | :---: |",
        "|:--|--:|",
        "  |---|  ",
    ])
    def test_separator_rows(self, line):
        assert is_separator_row(line)
    
    @pytest.mark.parametrize("line", [
        "| A | B |",
        "|-a-|",
        "---",
        "",
    ])
    def test_not_separator_rows(self, line):
        assert not is_separator_row(line)
    
    def test_table_row_requires_leading_pipe(self):
        assert is_table_row("| a |")
        assert is_table_row("| a | b |   ")
        assert not is_table_row("a | b |")
        assert not is_table_row("||")
    
    def test_split_cells_trims(self):
        assert split_cells("|  a | b  |c|") == ["a", "b", "c"]
    
    def test_split_cells_keeps_empty_cells(self):
        assert split_cells("| a | | c |") == ["a", "", "c"]


class TestParseTable:
    
    @pytest.fixture
    def table(self):
        return parse_table(["| A | B |", "|---|---|", "| 1 | 2 |"])
    
    def test_separator_contributes_no_row(self, table):
        assert len(table.rows) == 2
    
    def test_header_row(self, table):
        header = table.rows[0]
        assert cell_texts(header) == ["A", "B"]
        assert all(cell.header for cell in header.cells)
    
    def test_body_row(self, table):
        body = table.rows[1]
        assert cell_texts(body) == ["1", "2"]
        assert not any(cell.header for cell in body.cells)
    
    def test_serialization(self, table):
        assert table.to_dict() == {
            "type": "table",
            "attrs": {"isNumberColumnEnabled": False, "layout": "default"},
            "content": [
                {
                    "type": "tableRow",
                    "content": [
                        {
                            "type": "tableHeader",
                            "attrs": {},
                            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "A"}]}],
                        },
                        {
                            "type": "tableHeader",
                            "attrs": {},
                            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "B"}]}],
                        },
                    ],
                },
                {
                    "type": "tableRow",
                    "content": [
                        {
                            "type": "tableCell",
                            "attrs": {},
                            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "1"}]}],
                        },
                        {
                            "type": "tableCell",
                            "attrs": {},
                            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "2"}]}],
                        },
                    ],
                },
            ],
        }
    
    def test_cells_are_inline_rendered(self):
        table = parse_table(["| `abc1234` | fix |", "|---|---|"])
        first = table.rows[0].cells[0]
        assert first.content == (Paragraph((Text("abc1234", marks=(Code(),)),)),)
    
    def test_ragged_rows_are_not_padded(self):
        table = parse_table(["| A | B | C |", "|---|---|---|", "| 1 |", "| 1 | 2 | 3 | 4 |"])
        assert [len(row.cells) for row in table.rows] == [3, 1, 4]
    
    def test_separator_rows_anywhere_are_dropped(self):
        table = parse_table(["| A |", "|---|", "| 1 |", "|---|", "| 2 |"])
        assert [cell_texts(row) for row in table.rows] == [["A"], ["1"], ["2"]]
    
    def test_empty_cell_has_empty_text(self):
        table = parse_table(["| A | |", "|---|---|"])
        assert table.rows[0].cells[1].content == (Paragraph((Text(""),)),)
