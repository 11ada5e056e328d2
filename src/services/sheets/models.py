"""Value objects holding a loaded spreadsheet grid."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from src.config.config import FORMAT_CSV, FORMAT_JSON
from src.utils.error_utils import IndexOutOfRangeError, HeaderNotFoundError

logger = logging.getLogger(__name__)


class IndexedView(Sequence):
    """An immutable ordered sequence with optional name aliases.

    Integer keys address positions in ``[0, len)``; string keys are looked
    up in ``names`` (name -> position). Used for a single row or column of
    cells as well as for the collection of columns.
    """

    __slots__ = ('_items', '_names', '_what')

    def __init__(self, items, names: Optional[Mapping[str, int]] = None, what: str = "item"):
        self._items = tuple(items)
        self._names: Dict[str, int] = dict(names or {})
        self._what = what

    @property
    def names(self) -> Mapping[str, int]:
        return dict(self._names)

    def position(self, key) -> int:
        """Resolves an integer position or a header name to a position."""
        if isinstance(key, bool):
            raise HeaderNotFoundError(key, tuple(self._names))
        if isinstance(key, int):
            if not 0 <= key < len(self._items):
                raise IndexOutOfRangeError(key, len(self._items), self._what)
            return key
        if isinstance(key, str):
            try:
                return self._names[key]
            except KeyError:
                raise HeaderNotFoundError(key, tuple(self._names)) from None
        raise HeaderNotFoundError(key, tuple(self._names))

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._items[key]
        return self._items[self.position(key)]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __contains__(self, value) -> bool:
        return value in self._items

    def __eq__(self, other) -> bool:
        if isinstance(other, IndexedView):
            return self._items == other._items
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._items == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"


@dataclass(frozen=True)
class SheetSource:
    """Identity of a spreadsheet: enough to rebuild the URL it is fetched from."""
    spreadsheet_id: str
    sheet: Optional[str] = None
    key: Optional[str] = None
    cell_range: Optional[str] = None

    @property
    def kind(self) -> str:
        return 'api' if self.sheet is not None else 'export'

    @property
    def payload_format(self) -> str:
        return FORMAT_JSON if self.kind == 'api' else FORMAT_CSV

    @property
    def export_url(self) -> str:
        from .urls import build_export_url
        return build_export_url(self.spreadsheet_id)

    @property
    def api_url(self) -> str:
        from .urls import build_api_url
        return build_api_url(self.spreadsheet_id, self.sheet, self.key, self.cell_range)

    @property
    def url(self) -> str:
        return self.api_url if self.kind == 'api' else self.export_url

    def __repr__(self) -> str:
        # Keep API keys out of reprs and logs
        key = "'***'" if self.key else None
        return (f"SheetSource(spreadsheet_id={self.spreadsheet_id!r}, sheet={self.sheet!r}, "
                f"key={key}, cell_range={self.cell_range!r})")


class Sheet:
    """A populated, read-only spreadsheet grid.

    ``rows`` holds data rows only (the header row, if any, lives in
    ``headers``). ``cols`` is the transpose of ``rows``. In header mode
    every header name is an alias for its column in ``cols`` and for its
    cell inside each row.
    """

    def __init__(self, headers: Tuple[str, ...], rows, has_header: bool = False,
                 source: Optional[SheetSource] = None):
        self._has_header = bool(has_header)
        self._headers = tuple(headers) if self._has_header else ()
        self._source = source

        rows = [tuple(row) for row in rows]
        width = len(self._headers)
        for row in rows:
            width = max(width, len(row))
        self._width = width

        names = _header_positions(self._headers)
        padded = [row + ("",) * (width - len(row)) for row in rows]
        self._rows = IndexedView(
            (IndexedView(row, names, what="column") for row in padded),
            what="row",
        )
        self._cols = IndexedView(
            (IndexedView((row[c] for row in padded), what="row") for c in range(width)),
            names,
            what="column",
        )
        logger.debug(f"Built sheet with {len(self._rows)} rows x {width} columns (header: {self._has_header})")

    @property
    def rows(self) -> IndexedView:
        return self._rows

    @property
    def cols(self) -> IndexedView:
        return self._cols

    @property
    def headers(self) -> Tuple[str, ...]:
        return self._headers

    @property
    def has_header(self) -> bool:
        return self._has_header

    @property
    def source(self) -> Optional[SheetSource]:
        return self._source

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self._rows), self._width

    def row(self, index: int) -> IndexedView:
        """Returns the data row at ``index``."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(index, len(self._rows), "row")
        return self._rows[index]

    def col(self, key) -> IndexedView:
        """Returns a column by integer position or, in header mode, by header name."""
        return self._cols[key]

    def get(self, column, row: int) -> str:
        """Returns a single cell: ``col(column)[row]``."""
        return self.col(column)[row]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def __str__(self) -> str:
        from .serializer import to_csv
        return to_csv(self)

    def __repr__(self) -> str:
        rows, cols = self.shape
        return f"Sheet(rows={rows}, cols={cols}, has_header={self._has_header}, source={self._source!r})"


def _header_positions(headers: Tuple[str, ...]) -> Dict[str, int]:
    """Maps each header name to its column. Repeated names resolve to the right-most column."""
    positions: Dict[str, int] = {}
    for index, name in enumerate(headers):
        if name in positions:
            logger.warning(f"Duplicate header '{name}' at column {index}; alias now points to the later column.")
        positions[name] = index
    return positions
