"""Public core API for column mapping, statement building, and scanning."""

from .config import (
    DEFAULT_CONFIG,
    CrudConfig,
    dollar_placeholder,
    format_placeholder,
    numeric_placeholder,
    placeholder_for_paramstyle,
    qmark_placeholder,
)
from .contracts import ExecutionResult, ExecutorPort, QueryPort, RowCursor
from .crud import Crud
from .errors import CrudError, ExecutionError, MetadataError, PreconditionError
from .holders import HolderKind, NullableHolder
from .metadata import (
    FieldDescriptor,
    FieldKind,
    ModelMetadata,
    build_model_metadata,
    column_names,
    new_record,
    resolve,
    select_columns,
)
from .mutations import (
    CompiledStatement,
    build_insert,
    build_update,
    build_upsert,
    insert,
    update,
    upsert,
)
from .scanning import scan, scan_all
from .types import Float32, Float64, Int8, Int16, Int32, Int64, Width

__all__ = [
    "DEFAULT_CONFIG",
    "CrudConfig",
    "dollar_placeholder",
    "format_placeholder",
    "numeric_placeholder",
    "placeholder_for_paramstyle",
    "qmark_placeholder",
    "ExecutionResult",
    "ExecutorPort",
    "QueryPort",
    "RowCursor",
    "Crud",
    "CrudError",
    "ExecutionError",
    "MetadataError",
    "PreconditionError",
    "HolderKind",
    "NullableHolder",
    "FieldDescriptor",
    "FieldKind",
    "ModelMetadata",
    "build_model_metadata",
    "column_names",
    "new_record",
    "resolve",
    "select_columns",
    "CompiledStatement",
    "build_insert",
    "build_update",
    "build_upsert",
    "insert",
    "update",
    "upsert",
    "scan",
    "scan_all",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Width",
]
