"""Shared core type aliases used across contracts, metadata, and scanning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Callable, List, Sequence


@dataclass(frozen=True)
class Width:
    """Storage width marker attached to `int`/`float` annotations."""

    bits: int


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]

BindValues = List[Any]
RowValues = Sequence[Any]
PlaceholderFormatter = Callable[[int], str]
