"""Row cursor adapter over a DB-API cursor."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from ...core.types import RowValues


class DBAPIRowCursor:
    """Adapts a PEP 249 cursor to the `RowCursor` protocol.

    `next()` fetches one row ahead and `values()` returns it, so a cursor
    is consumed row by row without buffering the whole result.
    """

    def __init__(self, cursor: Any):
        self.cursor = cursor
        self._row: Any = None
        self._closed = False

    def columns(self) -> List[str]:
        desc = getattr(self.cursor, "description", None)
        if not desc:
            raise TypeError("Cursor has no description; statement returned no result set.")
        return [d[0] for d in desc]

    def next(self) -> bool:
        if self._closed:
            return False
        self._row = self.cursor.fetchone()
        return self._row is not None

    def values(self) -> RowValues:
        if self._row is None:
            raise RuntimeError("No current row; call next() first.")
        if isinstance(self._row, (tuple, list)):
            return self._row
        # dict cursors yield mappings; sqlite3.Row and similar iterate positionally
        if isinstance(self._row, Mapping):
            return list(self._row.values())
        return tuple(self._row)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._row = None
        close = getattr(self.cursor, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> DBAPIRowCursor:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
