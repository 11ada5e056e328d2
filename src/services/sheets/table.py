"""Table view of a Sheet: a plain grid description plus an HTML rendering."""

import html
from typing import NamedTuple, Tuple


class TableGrid(NamedTuple):
    header_cells: Tuple[str, ...]
    body: Tuple[Tuple[str, ...], ...]


def build_table(sheet) -> TableGrid:
    """Describes the sheet as header cells and body rows, row-major."""
    header_cells = tuple(sheet.headers) if sheet.has_header else ()
    body = tuple(tuple(row) for row in sheet.rows)
    return TableGrid(header_cells=header_cells, body=body)


def render_html(sheet) -> str:
    """Renders the sheet as an HTML <table>; cell text is escaped."""
    grid = build_table(sheet)
    parts = ["<table>"]
    if sheet.has_header:
        parts.append("<tr>" + "".join(f"<th>{html.escape(cell)}</th>" for cell in grid.header_cells) + "</tr>")
    for row in grid.body:
        parts.append("<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>")
    parts.append("</table>")
    return "".join(parts)
