"""Result-set scanning onto one or more tagged dataclass records."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from dataclasses import is_dataclass
from typing import Any, Dict, List, Tuple, Type

from .codecs import deserialize_field_value
from .contracts import RowCursor
from .errors import ExecutionError, MetadataError, PreconditionError
from .holders import NullableHolder
from .metadata import FieldDescriptor, ModelMetadata, new_record, resolve

logger = logging.getLogger(__name__)


class _FieldTarget:
    """Writes a column value straight onto a record attribute."""

    __slots__ = ("record", "descriptor")

    def __init__(self, record: Any, descriptor: FieldDescriptor):
        self.record = record
        self.descriptor = descriptor

    def assign(self, raw: Any) -> None:
        setattr(self.record, self.descriptor.attr, deserialize_field_value(self.descriptor, raw))


class _Discard:
    """Sink for result columns no record maps."""

    __slots__ = ()

    def assign(self, raw: Any) -> None:
        return None


_DISCARD = _Discard()


def scan(cursor: RowCursor, *targets: Any) -> None:
    """Copy the cursor's current row onto the given records by column name.

    Each string argument is a prefix for the column names of the record that
    follows it, so rows joining several tables aliased as `u_id, u_name, ...`
    can be spread across objects in one read. Rules:

    - When several records map the same column, the first registration wins
      and later records are left untouched.
    - Optional `int`/`float`/`bool`/`str` fields are read through a nullable
      holder registered under the bare column name; the prefix does not apply
      to them. A NULL leaves the field at its previous value.
    - Columns no record maps, and mapped fields absent from the row, are
      ignored.

    Raises:
        MetadataError: If a target is neither a string nor a dataclass record.
        ExecutionError: If reading the row or converting a value fails.
    """

    prefix = ""
    write_back: Dict[str, Any] = {}
    remap: List[Tuple[Any, FieldDescriptor, NullableHolder]] = []

    for arg in targets:
        if isinstance(arg, str):
            prefix = arg
            continue

        meta = _record_metadata(arg)
        for descriptor in meta.fields:
            if descriptor.optional_scalar:
                if descriptor.column not in write_back:
                    holder = NullableHolder.for_field(descriptor)
                    write_back[descriptor.column] = holder
                    remap.append((arg, descriptor, holder))
                continue
            write_back.setdefault(prefix + descriptor.column, _FieldTarget(arg, descriptor))

        prefix = ""

    columns = list(cursor.columns())
    bound = [write_back.get(column, _DISCARD) for column in columns]

    try:
        row = cursor.values()
        if len(row) != len(columns):
            raise ValueError(f"row has {len(row)} values for {len(columns)} columns")
        for target, raw in zip(bound, row):
            target.assign(raw)
    except Exception as exc:
        logger.debug("Scan failed for columns %r: %s", columns, exc)
        raise ExecutionError(f"scan failed: {exc}", columns=columns) from exc

    for record, descriptor, holder in remap:
        if holder.valid:
            setattr(record, descriptor.attr, holder.narrowed(descriptor))


def scan_all(cursor: RowCursor, destination: MutableSequence[Any], model: Type[Any]) -> None:
    """Scan every remaining row into fresh `model` records appended to `destination`.

    The cursor is always closed on return. On failure the records appended
    so far stay in `destination`.

    Replaces::

        try:
            while cursor.next():
                user = User()
                scan(cursor, user)
                users.append(user)
        finally:
            cursor.close()

    with::

        scan_all(cursor, users, User)
    """

    try:
        if not isinstance(destination, MutableSequence):
            raise PreconditionError(
                f"scan_all() destination must be a mutable sequence, "
                f"got {type(destination).__name__}."
            )
        if not isinstance(model, type) or not is_dataclass(model):
            raise PreconditionError(
                f"scan_all() model must be a dataclass type, got {model!r}."
            )

        count = 0
        while cursor.next():
            record = new_record(model)
            scan(cursor, record)
            destination.append(record)
            count += 1
        logger.debug("Collected %s %s records", count, model.__name__)
    finally:
        cursor.close()


def _record_metadata(arg: Any) -> ModelMetadata[Any]:
    if isinstance(arg, type) or not is_dataclass(arg):
        raise MetadataError(
            f"scan() targets must be dataclass records or prefix strings, "
            f"got {type(arg).__name__}."
        )
    return resolve(arg)
