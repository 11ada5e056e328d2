"""Loads a published spreadsheet into a Sheet.

Two named constructors share one path (fetch -> parse -> callback):

- ``from_export``: the public CSV link from 'Publish to web'.
- ``from_api``: the Sheets API v4 values endpoint (needs an API key).

``load_sheet_async`` runs the same path on a worker thread and reports
through ``on_load`` / ``on_error`` callbacks and a Future.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from src.config.config_loader import get_config
from src.utils.error_utils import ConfigurationError
from .client import fetch_text
from .models import Sheet, SheetSource
from .parser import parse_payload
from .urls import validate_cell_range

logger = logging.getLogger(__name__)

LoadCallback = Callable[[Sheet], None]
ErrorCallback = Callable[[Exception], None]

LOADER_MAX_WORKERS = 4

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        with _executor_lock:
            if _executor is None:
                _executor = ThreadPoolExecutor(max_workers=LOADER_MAX_WORKERS, thread_name_prefix="sheet-loader")
    return _executor


def load_sheet(source: SheetSource, has_header: bool = False, on_load: Optional[LoadCallback] = None) -> Sheet:
    """Fetches ``source`` once, parses it and hands the Sheet to ``on_load``.

    Raises:
        TransportError: The request failed or returned a non-2xx status.
        PayloadError: The body could not be parsed.
    """
    url = source.url
    body = fetch_text(url)
    sheet = parse_payload(body, has_header=has_header, fmt=source.payload_format, source=source)
    rows, cols = sheet.shape
    logger.info(f"Loaded {source.kind} sheet {source.spreadsheet_id}: {rows} rows x {cols} columns")
    if on_load is not None:
        on_load(sheet)
    return sheet


def from_export(spreadsheet_id: str, has_header: bool = False, on_load: Optional[LoadCallback] = None) -> Sheet:
    """Loads a sheet through its publish-to-web CSV export."""
    source = SheetSource(spreadsheet_id=spreadsheet_id)
    return load_sheet(source, has_header=has_header, on_load=on_load)


def api_source(spreadsheet_id: str, sheet: str, key: Optional[str] = None,
               cell_range: Optional[str] = None) -> SheetSource:
    """Builds the SheetSource for an API load, falling back to the configured key."""
    if not key:
        key = get_config().api_key
    if not key:
        logger.error("No API key passed and SHEETS_API_KEY is not configured.")
        raise ConfigurationError("An API key is required: pass key= or set SHEETS_API_KEY")
    if not sheet:
        raise ValueError("sheet name is required for API loads")
    # Fail on a bad range before any request is made
    cell_range = validate_cell_range(cell_range)
    return SheetSource(spreadsheet_id=spreadsheet_id, sheet=sheet, key=key, cell_range=cell_range)


def from_api(spreadsheet_id: str, sheet: str, key: Optional[str] = None, has_header: bool = False,
             cell_range: Optional[str] = None, on_load: Optional[LoadCallback] = None) -> Sheet:
    """Loads a sheet (optionally a cell range such as 'A1:G23') through the Sheets API."""
    source = api_source(spreadsheet_id, sheet, key, cell_range)
    return load_sheet(source, has_header=has_header, on_load=on_load)


def load_sheet_async(source: SheetSource, has_header: bool = False, on_load: Optional[LoadCallback] = None,
                     on_error: Optional[ErrorCallback] = None,
                     executor: Optional[ThreadPoolExecutor] = None) -> "Future[Sheet]":
    """Runs ``load_sheet`` on a worker thread.

    Exactly one of ``on_load`` / ``on_error`` is called. The returned Future
    resolves to the Sheet or carries the exception.
    """
    def _run() -> Sheet:
        try:
            sheet = load_sheet(source, has_header=has_header)
        except Exception as e:
            logger.error(f"Background load of {source.spreadsheet_id} failed: {e}")
            if on_error is not None:
                on_error(e)
            raise
        if on_load is not None:
            on_load(sheet)
        return sheet

    return (executor or _get_executor()).submit(_run)
