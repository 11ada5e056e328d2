"""Builds export/API URLs and validates the identifiers that go into them."""

import logging
import re
from typing import Optional
from urllib.parse import quote, urlencode

import gspread
from gspread.exceptions import IncorrectCellLabel, NoValidUrlKeyFound

from src.config.config import EXPORT_URL_TEMPLATE, API_URL_TEMPLATE

logger = logging.getLogger(__name__)

# Publish-to-web links carry an 'e/' segment before the published id
PUBLISHED_ID_RE = re.compile(r"/spreadsheets/d/e/([a-zA-Z0-9_-]+)")


def extract_spreadsheet_id(url: str) -> str:
    """Returns the spreadsheet id from a publish URL or a regular edit URL.

    Raises:
        ValueError: If no id can be found in the URL.
    """
    m = PUBLISHED_ID_RE.search(url or "")
    if m:
        return m.group(1)
    try:
        return gspread.utils.extract_id_from_url(url or "")
    except NoValidUrlKeyFound:
        logger.error(f"Could not extract a spreadsheet id from URL: {url}")
        raise ValueError(f"No spreadsheet id found in URL: {url}") from None


def validate_cell_range(cell_range: Optional[str]) -> Optional[str]:
    """Checks that ``cell_range`` is A1 notation (e.g. 'A1:G23'). Empty means 'whole sheet'."""
    if cell_range is None:
        return None
    cell_range = cell_range.strip()
    if not cell_range:
        return None
    try:
        gspread.utils.a1_range_to_grid_range(cell_range)
    except IncorrectCellLabel:
        logger.error(f"Invalid A1 range: '{cell_range}'")
        raise ValueError(f"Invalid A1 cell range: {cell_range!r}") from None
    return cell_range


def build_export_url(spreadsheet_id: str) -> str:
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required")
    return EXPORT_URL_TEMPLATE.format(spreadsheet_id=spreadsheet_id)


def build_api_url(spreadsheet_id: str, sheet: str, key: Optional[str], cell_range: Optional[str] = None) -> str:
    """Builds the Sheets API v4 values URL: ``.../values/{sheet}[!{range}]?key={key}``."""
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required")
    if not sheet:
        raise ValueError("sheet name is required for API loads")
    cell_range = validate_cell_range(cell_range)

    target = quote(sheet, safe="")
    if cell_range is not None:
        target += "!" + quote(cell_range, safe=":")
    return API_URL_TEMPLATE.format(
        spreadsheet_id=spreadsheet_id,
        target=target,
        query=urlencode({'key': key or ''}),
    )
