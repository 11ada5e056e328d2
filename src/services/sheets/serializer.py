"""Converts a Sheet back into CSV text."""


def to_csv(sheet) -> str:
    """Returns the sheet as CSV: header line (in header mode), then one line per row.

    Fields are joined with ',' and rows with '\\n', with no trailing newline.
    Nothing is quoted or escaped, so a cell containing ',' or a newline will
    not parse back to the same grid.
    """
    lines = []
    if sheet.has_header:
        lines.append(",".join(sheet.headers))
    lines.extend(",".join(row) for row in sheet.rows)
    return "\n".join(lines)
