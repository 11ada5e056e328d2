"""Module for reading published Google Sheets.

Provides functions to:
- Load a sheet from its publish-to-web CSV export or the Sheets API.
- Parse CSV / API payloads into a row- and column-addressable Sheet.
- Serialize a Sheet back to CSV or render it as an HTML table.
"""

# Public API for the sheets service

from .models import Sheet, SheetSource, IndexedView
from .urls import extract_spreadsheet_id, build_export_url, build_api_url
from .parser import parse_csv, parse_values, parse_payload
from .loader import from_export, from_api, load_sheet, load_sheet_async
from .serializer import to_csv
from .table import TableGrid, build_table, render_html

__all__ = [
    'Sheet',
    'SheetSource',
    'IndexedView',
    'extract_spreadsheet_id',
    'build_export_url',
    'build_api_url',
    'parse_csv',
    'parse_values',
    'parse_payload',
    'from_export',
    'from_api',
    'load_sheet',
    'load_sheet_async',
    'to_csv',
    'TableGrid',
    'build_table',
    'render_html',
]
