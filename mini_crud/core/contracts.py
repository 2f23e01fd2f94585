"""Core port contracts used by adapters and the mapping engine."""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence

from .types import BindValues, RowValues


class ExecutionResult(Protocol):
    """Outcome of an executed statement.

    `lastrowid` is the backend-generated id, or `None` when unavailable.
    """

    lastrowid: Any


class RowCursor(Protocol):
    """Result-set cursor consumed by `scan()` and `scan_all()`."""

    def columns(self) -> List[str]: ...

    def next(self) -> bool: ...

    def values(self) -> RowValues: ...

    def close(self) -> None: ...


class ExecutorPort(Protocol):
    """Statement execution behavior required by mutation operations."""

    def execute(self, sql: str, params: BindValues | None = None) -> ExecutionResult: ...


class QueryPort(ExecutorPort, Protocol):
    """Execution port that can also open result-set cursors."""

    def query(self, sql: str, params: Sequence[Any] | None = None) -> RowCursor: ...
