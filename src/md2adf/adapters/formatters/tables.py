"""
Table Sub-parser - Build an ADF table from pipe-delimited lines.
"""

import re

from ...core.domain.nodes import Paragraph, Table, TableCell, TableRow
from .inline import render_inline


# A row made only of pipes, dashes, colons and whitespace: |---|:--:|
SEPARATOR_ROW = re.compile(r"^\|[\s\-:|]+\|$")

# Any line that starts with a pipe and has at least one more after it.
TABLE_ROW = re.compile(r"^\|.+\|")


def is_separator_row(line: str) -> bool:
    return bool(SEPARATOR_ROW.match(line.strip()))


def is_table_row(line: str) -> bool:
    return bool(TABLE_ROW.match(line.rstrip()))


def split_cells(line: str) -> list[str]:
    """Strip the outer pipes, split on the inner ones and trim each cell."""
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]
    return [cell.strip() for cell in line.split("|")]


def parse_table(lines: list[str]) -> Table:
    """
    Parse a run of table lines.

    The first line is the header row. Separator rows are dropped. Rows keep
    as many cells as they have segments; column counts are not padded.
    """
    rows: list[TableRow] = []

    for index, line in enumerate(lines):
        if is_separator_row(line):
            continue

        header = index == 0
        cells = tuple(
            TableCell(
                content=(Paragraph(tuple(render_inline(cell_text))),),
                header=header,
            )
            for cell_text in split_cells(line)
        )
        rows.append(TableRow(cells))

    return Table(tuple(rows))
