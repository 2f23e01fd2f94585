from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from mini_crud.core.codecs import (
    deserialize_field_value,
    narrow_float,
    narrow_int,
    serialize_field_value,
)
from mini_crud.core.holders import HolderKind, NullableHolder
from mini_crud.core.metadata import build_model_metadata
from mini_crud.core.types import Int8, Int32


@dataclass
class CodecModel:
    small: Int8 = field(default=0, metadata={"sql": "small"})
    medium: Optional[Int32] = field(default=None, metadata={"sql": "medium"})
    name: str = field(default="", metadata={"sql": "name"})
    at: datetime = field(
        default=datetime(2000, 1, 1, tzinfo=timezone.utc), metadata={"sql": "at,unix"}
    )
    iso: Optional[datetime] = field(default=None, metadata={"sql": "iso"})
    done: Optional[bool] = field(default=None, metadata={"sql": "done"})


def _descriptor(column: str):  # noqa: ANN202
    descriptor = build_model_metadata(CodecModel).get(column)
    assert descriptor is not None
    return descriptor


class NarrowingTests(unittest.TestCase):
    def test_narrow_int_wraps_like_twos_complement(self) -> None:
        self.assertEqual(narrow_int(127, 8), 127)
        self.assertEqual(narrow_int(128, 8), -128)
        self.assertEqual(narrow_int(-129, 8), 127)
        self.assertEqual(narrow_int(2**63, 64), -(2**63))
        self.assertEqual(narrow_int(2**70, None), 2**70)

    def test_narrow_float_only_rounds_single_precision(self) -> None:
        self.assertEqual(narrow_float(0.1, 64), 0.1)
        self.assertEqual(narrow_float(0.1, None), 0.1)
        self.assertNotEqual(narrow_float(0.1, 32), 0.1)
        self.assertEqual(narrow_float(1.5, 32), 1.5)


class FieldCodecTests(unittest.TestCase):
    def test_serialize_unix_time_and_passthrough(self) -> None:
        at = _descriptor("at")

        self.assertEqual(serialize_field_value(at, datetime(1970, 1, 2, tzinfo=timezone.utc)), 86400)
        self.assertIsNone(serialize_field_value(at, None))
        self.assertEqual(serialize_field_value(_descriptor("name"), "x"), "x")

    def test_serialize_ignores_datetime_without_unix_flag(self) -> None:
        value = datetime(2001, 1, 1, tzinfo=timezone.utc)

        self.assertIs(serialize_field_value(_descriptor("iso"), value), value)

    def test_deserialize_direct_values(self) -> None:
        self.assertEqual(deserialize_field_value(_descriptor("small"), 12), 12)
        self.assertEqual(deserialize_field_value(_descriptor("name"), b"abc"), "abc")
        self.assertEqual(deserialize_field_value(_descriptor("name"), 5), "5")
        self.assertEqual(
            deserialize_field_value(_descriptor("at"), 0),
            datetime(1970, 1, 1, tzinfo=timezone.utc),
        )
        self.assertEqual(
            deserialize_field_value(_descriptor("iso"), "2024-05-01T10:00:00"),
            datetime(2024, 5, 1, 10, 0, 0),
        )

    def test_deserialize_rejects_out_of_range_and_null(self) -> None:
        with self.assertRaisesRegex(ValueError, "out of range"):
            deserialize_field_value(_descriptor("small"), 1000)
        with self.assertRaisesRegex(ValueError, "NULL"):
            deserialize_field_value(_descriptor("name"), None)
        self.assertIsNone(deserialize_field_value(_descriptor("medium"), None))


class NullableHolderTests(unittest.TestCase):
    def test_holder_kind_follows_field_kind(self) -> None:
        self.assertEqual(NullableHolder.for_field(_descriptor("medium")).declared, HolderKind.INT64)
        self.assertEqual(NullableHolder.for_field(_descriptor("done")).declared, HolderKind.BOOL)

    def test_holder_starts_null(self) -> None:
        holder = NullableHolder(HolderKind.STRING)

        self.assertFalse(holder.valid)
        self.assertIs(holder.kind, HolderKind.NULL)

    def test_holder_assign_and_narrow(self) -> None:
        holder = NullableHolder.for_field(_descriptor("medium"))

        holder.assign(2**32 + 5)

        self.assertTrue(holder.valid)
        self.assertIs(holder.kind, HolderKind.INT64)
        self.assertEqual(holder.narrowed(_descriptor("medium")), 5)

    def test_holder_assign_null_resets(self) -> None:
        holder = NullableHolder(HolderKind.FLOAT64)
        holder.assign("1.25")
        self.assertEqual(holder.value, 1.25)

        holder.assign(None)

        self.assertFalse(holder.valid)
        self.assertIsNone(holder.value)

    def test_holder_string_decodes_bytes(self) -> None:
        holder = NullableHolder(HolderKind.STRING)

        holder.assign(b"caf\xc3\xa9")

        self.assertEqual(holder.value, "café")

    def test_null_kind_cannot_be_declared(self) -> None:
        with self.assertRaises(ValueError):
            NullableHolder(HolderKind.NULL)


if __name__ == "__main__":
    unittest.main()
