"""Field value codecs for DB writes and scan write-through."""

from __future__ import annotations

import struct
from datetime import datetime, timezone
from typing import Any, Optional

from .metadata import SCALAR_KINDS, FieldDescriptor, FieldKind


def serialize_field_value(descriptor: FieldDescriptor, value: Any) -> Any:
    """Serialize one field value for DB writes.

    Unix-flagged fields holding a datetime are bound as integer epoch
    seconds. Everything else, `None` included, passes through.
    """

    if descriptor.unix and isinstance(value, datetime):
        return int(value.timestamp())
    return value


def narrow_int(value: int, bits: Optional[int]) -> int:
    """Truncate an integer to a signed two's complement width."""

    if bits is None:
        return value
    span = 1 << bits
    half = span >> 1
    return ((value + half) % span) - half


def narrow_float(value: float, bits: Optional[int]) -> float:
    """Round a float to single precision when the width is 32 bits."""

    if bits == 32:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    return value


def deserialize_field_value(descriptor: FieldDescriptor, raw: Any) -> Any:
    """Convert one raw column value for a directly bound field.

    Raises:
        ValueError: For `NULL` into a non-optional scalar field, or an
            integer outside the declared width.
        TypeError: When the raw value cannot be converted to the field kind.
    """

    kind = descriptor.kind
    if raw is None:
        if kind in SCALAR_KINDS and not descriptor.optional:
            raise ValueError(
                f"cannot assign NULL to non-optional field {descriptor.attr!r} "
                f"(column {descriptor.column!r})"
            )
        return None

    if kind is FieldKind.INT:
        value = int(raw)
        if descriptor.width is not None and narrow_int(value, descriptor.width) != value:
            raise ValueError(
                f"value {value!r} out of range for {descriptor.width}-bit field "
                f"{descriptor.attr!r}"
            )
        return value
    if kind is FieldKind.FLOAT:
        return narrow_float(float(raw), descriptor.width)
    if kind is FieldKind.BOOL:
        return bool(raw)
    if kind is FieldKind.STR:
        return to_text(raw)
    if kind is FieldKind.DATETIME:
        if descriptor.unix and isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return datetime.fromtimestamp(raw, tz=timezone.utc)
        if isinstance(raw, str):
            return datetime.fromisoformat(raw)
        return raw
    return raw


def to_text(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    return str(raw)
