"""Facade that binds an execution port and config to the CRUD operations."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Type, TypeVar

from . import mutations, scanning
from .config import CrudConfig, resolve_config
from .contracts import ExecutorPort, RowCursor
from .metadata import new_record

T = TypeVar("T")


class Crud:
    """CRUD helper backed by an `ExecutorPort` implementation.

    `fetch_all()`/`fetch_one()` additionally require the port to provide
    `query()` (see `QueryPort`).
    """

    def __init__(self, db: ExecutorPort, config: Optional[CrudConfig] = None):
        self.db = db
        self.config = resolve_config(config)

    def update(self, table: str, id_column: str, record: Any) -> None:
        mutations.update(self.db, table, id_column, record, config=self.config)

    def insert(self, table: str, id_column: str, record: Any) -> int:
        return mutations.insert(self.db, table, id_column, record, config=self.config)

    def upsert(self, table: str, id_column: str, record: Any) -> int:
        return mutations.upsert(self.db, table, id_column, record, config=self.config)

    def scan(self, cursor: RowCursor, *targets: Any) -> None:
        scanning.scan(cursor, *targets)

    def scan_all(self, cursor: RowCursor, destination: List[Any], model: Type[Any]) -> None:
        scanning.scan_all(cursor, destination, model)

    def fetch_all(
        self,
        model: Type[T],
        sql: str,
        params: Sequence[Any] | None = None,
    ) -> List[T]:
        """Run a SELECT and scan every row into a new `model` record."""

        records: List[T] = []
        scanning.scan_all(self._query(sql, params), records, model)
        return records

    def fetch_one(
        self,
        model: Type[T],
        sql: str,
        params: Sequence[Any] | None = None,
    ) -> Optional[T]:
        """Run a SELECT and scan its first row, or return `None` without rows."""

        cursor = self._query(sql, params)
        try:
            if not cursor.next():
                return None
            record = new_record(model)
            scanning.scan(cursor, record)
            return record
        finally:
            cursor.close()

    def _query(self, sql: str, params: Sequence[Any] | None) -> RowCursor:
        query = getattr(self.db, "query", None)
        if not callable(query):
            raise TypeError(f"{type(self.db).__name__} does not support query().")
        return query(sql, params)
