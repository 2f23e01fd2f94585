"""Nullable holders used to route SQL NULLs into optional fields."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .codecs import narrow_float, narrow_int, to_text
from .metadata import FieldDescriptor, FieldKind


class HolderKind(str, Enum):
    """Closed set of values a holder can carry."""

    INT64 = "int64"
    FLOAT64 = "float64"
    BOOL = "bool"
    STRING = "string"
    NULL = "null"


_KIND_FOR_FIELD = {
    FieldKind.INT: HolderKind.INT64,
    FieldKind.FLOAT: HolderKind.FLOAT64,
    FieldKind.BOOL: HolderKind.BOOL,
    FieldKind.STR: HolderKind.STRING,
}


class NullableHolder:
    """Transient box for one possibly-NULL scalar read from a row.

    A holder starts as `NULL` and takes its declared kind once a non-NULL
    value is assigned.
    """

    __slots__ = ("declared", "kind", "value")

    def __init__(self, declared: HolderKind):
        if declared is HolderKind.NULL:
            raise ValueError("holder must declare a value kind")
        self.declared = declared
        self.kind = HolderKind.NULL
        self.value: Any = None

    @classmethod
    def for_field(cls, descriptor: FieldDescriptor) -> NullableHolder:
        return cls(_KIND_FOR_FIELD[descriptor.kind])

    @property
    def valid(self) -> bool:
        return self.kind is not HolderKind.NULL

    def assign(self, raw: Any) -> None:
        if raw is None:
            self.kind = HolderKind.NULL
            self.value = None
            return

        if self.declared is HolderKind.INT64:
            self.value = int(raw)
        elif self.declared is HolderKind.FLOAT64:
            self.value = float(raw)
        elif self.declared is HolderKind.BOOL:
            self.value = bool(raw)
        else:
            self.value = to_text(raw)
        self.kind = self.declared

    def narrowed(self, descriptor: FieldDescriptor) -> Any:
        """Return the held value converted to the field's declared width."""

        if self.kind is HolderKind.INT64:
            return narrow_int(self.value, descriptor.width)
        if self.kind is HolderKind.FLOAT64:
            return narrow_float(self.value, descriptor.width)
        return self.value

    def __repr__(self) -> str:
        return f"NullableHolder({self.kind.value}, {self.value!r})"
