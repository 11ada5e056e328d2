"""Turns a fetched payload (CSV text or a Sheets API JSON body) into a Sheet.

Pure functions only: no network, no config. The loader fetches, these parse.
"""

import json
import logging
from typing import Any, List, Optional

from src.config.config import FORMAT_CSV, FORMAT_JSON
from src.utils.error_utils import PayloadError
from .models import Sheet, SheetSource

logger = logging.getLogger(__name__)


def split_csv_rows(text: str) -> List[List[str]]:
    """Splits CSV text into rows of cells.

    Rows are separated by '\\n' (a trailing '\\r' is dropped, so CRLF works),
    cells by ','. Quoted fields are NOT understood: a comma inside quotes
    still splits the cell. One trailing empty line (the final terminator)
    is dropped; an empty text gives no rows.
    """
    if not isinstance(text, str):
        raise PayloadError(f"CSV payload must be text, got {type(text).__name__}")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1].split(",") if line.endswith("\r") else line.split(",") for line in lines]


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def extract_values(body: Any) -> List[List[str]]:
    """Pulls the ``values`` array out of a decoded Sheets API response."""
    if not isinstance(body, dict):
        raise PayloadError(f"Expected a JSON object, got {type(body).__name__}")
    if "values" not in body:
        raise PayloadError("JSON payload has no 'values' field")
    values = body["values"]
    if not isinstance(values, list):
        raise PayloadError(f"'values' must be an array, got {type(values).__name__}")

    rows = []
    for i, raw_row in enumerate(values):
        if not isinstance(raw_row, list):
            raise PayloadError(f"'values[{i}]' must be an array, got {type(raw_row).__name__}")
        rows.append([_cell_text(cell) for cell in raw_row])
    return rows


def build_sheet(raw_rows: List[List[str]], has_header: bool = False, source: Optional[SheetSource] = None) -> Sheet:
    """Splits off the header row (in header mode) and builds the Sheet."""
    if has_header and raw_rows:
        headers, data_rows = raw_rows[0], raw_rows[1:]
    else:
        headers, data_rows = [], raw_rows
    return Sheet(headers, data_rows, has_header=has_header, source=source)


def parse_csv(text: str, has_header: bool = False, source: Optional[SheetSource] = None) -> Sheet:
    """Parses CSV export text into a Sheet."""
    raw_rows = split_csv_rows(text)
    logger.debug(f"Parsed {len(raw_rows)} CSV lines (header: {has_header})")
    return build_sheet(raw_rows, has_header, source)


def parse_values(body: Any, has_header: bool = False, source: Optional[SheetSource] = None) -> Sheet:
    """Parses a Sheets API response body (JSON text or an already decoded dict)."""
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            logger.error(f"Error decoding Sheets API JSON response: {e}")
            raise PayloadError(f"Response is not valid JSON: {e}") from e
    raw_rows = extract_values(body)
    logger.debug(f"Parsed {len(raw_rows)} value rows (header: {has_header})")
    return build_sheet(raw_rows, has_header, source)


def parse_payload(payload: Any, has_header: bool = False, fmt: str = FORMAT_CSV,
                  source: Optional[SheetSource] = None) -> Sheet:
    """Dispatches on payload format ('csv' or 'json')."""
    if fmt == FORMAT_CSV:
        return parse_csv(payload, has_header, source)
    if fmt == FORMAT_JSON:
        return parse_values(payload, has_header, source)
    raise ValueError(f"Unknown payload format: {fmt!r}")
