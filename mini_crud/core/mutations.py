"""UPDATE/INSERT/UPSERT statement builders over tagged dataclass records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, is_dataclass
from typing import Any, List

from .codecs import serialize_field_value
from .config import CrudConfig, resolve_config
from .contracts import ExecutionResult, ExecutorPort
from .errors import ExecutionError, MetadataError, PreconditionError
from .metadata import FieldDescriptor, ModelMetadata, resolve
from .types import BindValues

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledStatement:
    """Statement text with its positionally aligned bind values."""

    sql: str
    params: BindValues


def build_update(
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> CompiledStatement:
    """Compile `UPDATE <table> SET c1 = ?, ... WHERE <id_column> = ?`.

    Raises:
        MetadataError: If `record` is not a dataclass instance.
        PreconditionError: If the id field is unmapped, `None`, or `0`, or no
            other column is writable.
    """

    config = resolve_config(config)
    meta = _record_metadata(record)

    id_field = meta.get(id_column)
    if id_field is None:
        raise PreconditionError(
            f"id missing: {id_column!r} is not a mapped column of "
            f"{meta.model.__name__}, cannot update"
        )
    id_value = getattr(record, id_field.attr)
    if id_value is None or id_value == 0:
        raise PreconditionError(f"id missing: {id_column} is 0 or not set, cannot update")

    assignments: List[str] = []
    params: BindValues = []
    ordinal = 1
    for descriptor in _writable_fields(meta, id_column, "UPDATE"):
        assignments.append(f"{descriptor.column} = {config.placeholder(ordinal)}")
        params.append(serialize_field_value(descriptor, getattr(record, descriptor.attr)))
        ordinal += 1

    params.append(id_value)
    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"WHERE {id_column} = {config.placeholder(ordinal)}"
    )
    return CompiledStatement(sql, params)


def build_insert(
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> CompiledStatement:
    """Compile `INSERT INTO <table> (c1, ...) VALUES (p1, ...)`.

    The id column is never part of the statement; the database assigns it.
    """

    config = resolve_config(config)
    meta = _record_metadata(record)
    columns, placeholders, params = _insert_parts(meta, id_column, record, config)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
    return CompiledStatement(sql, params)


def build_upsert(
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> CompiledStatement:
    """Compile an insert with a conflict-update branch.

    Every value is referenced twice by the statement, so the bind list is the
    insert bind list followed by an identical copy.
    """

    config = resolve_config(config)
    meta = _record_metadata(record)
    columns, placeholders, params = _insert_parts(meta, id_column, record, config)

    ordinal = len(placeholders) + 1
    assignments: List[str] = []
    for column in columns:
        assignments.append(f"{column} = {config.placeholder(ordinal)}")
        ordinal += 1

    conflict = config.conflict_clause.format(id_column=id_column)
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(placeholders)}) "
        f"{conflict} {', '.join(assignments)}"
    )
    return CompiledStatement(sql, params + params)


def update(
    db: ExecutorPort,
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> None:
    """Sync a tagged record with its existing row, keyed by `id_column`.

    Execution errors from `db` propagate unchanged.
    """

    statement = build_update(table, id_column, record, config=config)
    logger.debug("Executing update with %s parameters: %s", len(statement.params), statement.sql)
    db.execute(statement.sql, statement.params)


def insert(
    db: ExecutorPort,
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> int:
    """Insert a tagged record and return the database-generated id."""

    config = resolve_config(config)
    statement = build_insert(table, id_column, record, config=config)
    logger.debug("Executing insert with %s parameters: %s", len(statement.params), statement.sql)
    result = db.execute(statement.sql, statement.params)
    return _generated_id(result, config, table)


def upsert(
    db: ExecutorPort,
    table: str,
    id_column: str,
    record: Any,
    *,
    config: CrudConfig | None = None,
) -> int:
    """Insert a tagged record, updating the conflicting row when one exists.

    Falls back to `insert()` unless `config.enable_upsert` is set.
    """

    config = resolve_config(config)
    if not config.enable_upsert:
        logger.debug("Upsert disabled, falling back to INSERT for %s", table)
        return insert(db, table, id_column, record, config=config)

    statement = build_upsert(table, id_column, record, config=config)
    logger.debug("Executing upsert with %s parameters: %s", len(statement.params), statement.sql)
    result = db.execute(statement.sql, statement.params)
    return _generated_id(result, config, table)


def _record_metadata(record: Any) -> ModelMetadata[Any]:
    if isinstance(record, type) or not is_dataclass(record):
        raise MetadataError(
            f"Expected a dataclass record instance, got {type(record).__name__}."
        )
    return resolve(record)


def _writable_fields(
    meta: ModelMetadata[Any],
    id_column: str,
    statement: str,
) -> List[FieldDescriptor]:
    writable = meta.writable(id_column)
    if not writable:
        raise PreconditionError(
            f"Cannot {statement} {meta.model.__name__} with no writable columns "
            f"besides {id_column!r}."
        )
    return writable


def _insert_parts(
    meta: ModelMetadata[Any],
    id_column: str,
    record: Any,
    config: CrudConfig,
) -> tuple[List[str], List[str], BindValues]:
    columns: List[str] = []
    placeholders: List[str] = []
    params: BindValues = []
    ordinal = 1
    for descriptor in _writable_fields(meta, id_column, "INSERT"):
        columns.append(descriptor.column)
        placeholders.append(config.placeholder(ordinal))
        params.append(serialize_field_value(descriptor, getattr(record, descriptor.attr)))
        ordinal += 1
    return columns, placeholders, params


def _generated_id(result: ExecutionResult, config: CrudConfig, table: str) -> int:
    new_id = getattr(result, "lastrowid", None)
    if new_id is not None:
        return int(new_id)
    if config.tolerate_missing_insert_id:
        logger.debug("Backend reported no generated id for %s, returning 0", table)
        return 0
    raise ExecutionError(f"backend did not report a generated id for insert into {table}")
