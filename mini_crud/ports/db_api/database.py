"""DB-API adapter implementation for the core execution and query ports."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ...core.config import CrudConfig
from .cursor import DBAPIRowCursor

logger = logging.getLogger(__name__)


class Database:
    """Thin DB-API wrapper exposing `execute()` and cursor-returning `query()`."""

    def __init__(self, conn: Any, paramstyle: Optional[str] = None):
        """Create database adapter.

        Args:
            conn: DB-API connection object.
            paramstyle: Placeholder style of the driver. Read from the
                driver module's `paramstyle` when omitted.
        """

        self.conn: Any | None = conn
        self._closed = False
        self.paramstyle = paramstyle or _driver_paramstyle(conn)

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def crud_config(self, **overrides: Any) -> CrudConfig:
        """Return a `CrudConfig` whose placeholders match this driver."""

        return CrudConfig.for_paramstyle(self.paramstyle, **overrides)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """Execute SQL with optional parameters and return the DB-API cursor."""

        conn = self._require_open_connection()
        cur = conn.cursor()
        if params is None:
            cur.execute(sql)
        else:
            cur.execute(sql, list(params))
        return cur

    def query(self, sql: str, params: Sequence[Any] | None = None) -> DBAPIRowCursor:
        """Execute a SELECT and return a row cursor for `scan()`/`scan_all()`."""

        return DBAPIRowCursor(self.execute(sql, params))

    def close(self) -> None:
        """Close the underlying connection."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _driver_paramstyle(conn: Any) -> str:
    module_obj = __import__(conn.__class__.__module__)
    paramstyle = getattr(module_obj, "paramstyle", None)
    if not isinstance(paramstyle, str):
        logger.debug("No paramstyle on %s, assuming qmark", module_obj.__name__)
        return "qmark"
    return paramstyle
