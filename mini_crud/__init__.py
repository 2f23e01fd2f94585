"""Map tagged dataclass records to SQL statements and result rows."""

from .core import (
    DEFAULT_CONFIG,
    Crud,
    CrudConfig,
    CrudError,
    ExecutionError,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    MetadataError,
    PreconditionError,
    column_names,
    insert,
    new_record,
    placeholder_for_paramstyle,
    scan,
    scan_all,
    select_columns,
    update,
    upsert,
)
from .ports import Database, DBAPIRowCursor

__all__ = [
    "DEFAULT_CONFIG",
    "Crud",
    "CrudConfig",
    "CrudError",
    "ExecutionError",
    "MetadataError",
    "PreconditionError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "column_names",
    "insert",
    "new_record",
    "placeholder_for_paramstyle",
    "scan",
    "scan_all",
    "select_columns",
    "update",
    "upsert",
    "Database",
    "DBAPIRowCursor",
]
