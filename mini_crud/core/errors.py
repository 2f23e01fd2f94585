"""Error kinds raised by mapping, mutation, and scan operations."""

from __future__ import annotations

from typing import Optional, Sequence


class CrudError(Exception):
    """Base class for all mini_crud errors."""


class MetadataError(CrudError, TypeError):
    """Raised when a record type cannot be mapped to columns."""


class PreconditionError(CrudError, ValueError):
    """Raised when a caller precondition is violated."""


class ExecutionError(CrudError):
    """Raised when reading a row or collecting a statement result fails.

    `columns` carries the result-set column list of the failed scan, when
    the failure happened while reading a row.
    """

    def __init__(self, message: str, *, columns: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.columns = list(columns) if columns is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.columns is None:
            return message
        return f"{message} (columns: {self.columns!r})"
