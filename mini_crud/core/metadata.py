"""Column metadata extraction used by statement building and scanning.

Record types are plain dataclasses. A field takes part in mapping when its
dataclass metadata carries an `sql` tag::

    @dataclass
    class User:
        id: int = field(default=0, metadata={"sql": "id,readonly"})
        name: str = field(default="", metadata={"sql": "name"})
        age: Optional[Int32] = field(default=None, metadata={"sql": "age"})
        seen: Optional[datetime] = field(default=None, metadata={"sql": "seen,unix"})

The first tag item is the column name. Options are `readonly` (never written
by update/insert/upsert) and `unix` (datetime stored as epoch seconds). A tag
of `"-"` and untagged fields are not mapped.
"""

from __future__ import annotations

import logging
import types
from dataclasses import MISSING, Field, dataclass, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    Dict,
    Generic,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .errors import MetadataError
from .types import Width

logger = logging.getLogger(__name__)

T = TypeVar("T")

TAG_KEY = "sql"
_TAG_OPTIONS = {"readonly", "unix"}


class FieldKind(str, Enum):
    """Storage family of a mapped field."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    DATETIME = "datetime"
    OTHER = "other"


SCALAR_KINDS = frozenset({FieldKind.INT, FieldKind.FLOAT, FieldKind.BOOL, FieldKind.STR})


@dataclass(frozen=True)
class FieldDescriptor:
    """Links one column to one dataclass attribute."""

    column: str
    attr: str
    read_only: bool = False
    unix: bool = False
    kind: FieldKind = FieldKind.OTHER
    optional: bool = False
    width: Optional[int] = None

    @property
    def optional_scalar(self) -> bool:
        """Whether scans route this field through a nullable holder."""

        return self.optional and self.kind in SCALAR_KINDS


@dataclass(frozen=True)
class ModelMetadata(Generic[T]):
    """Immutable column mapping of one record type, in declaration order."""

    model: Type[T]
    fields: Tuple[FieldDescriptor, ...]

    @property
    def columns(self) -> List[str]:
        return [descriptor.column for descriptor in self.fields]

    def get(self, column: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.column == column:
                return descriptor
        return None

    def writable(self, id_column: str) -> List[FieldDescriptor]:
        """Fields bound by mutations: not read-only and not the id column."""

        return [
            descriptor
            for descriptor in self.fields
            if not descriptor.read_only and descriptor.column != id_column
        ]


def resolve(record_or_type: Any) -> ModelMetadata[Any]:
    """Return metadata for a dataclass instance or dataclass type.

    Raises:
        MetadataError: If the argument is not a dataclass or its tags conflict.
    """

    cls = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    return build_model_metadata(cls)


@lru_cache(maxsize=None)
def build_model_metadata(model: Type[T]) -> ModelMetadata[T]:
    """Build column metadata from dataclass annotations and field tags.

    Args:
        model: Dataclass record type.

    Returns:
        Cached, immutable metadata object.

    Raises:
        MetadataError: If `model` is not a mutable dataclass, its annotations
            cannot be resolved, a tag is malformed, or two fields claim the
            same column.
    """

    if not isinstance(model, type) or not is_dataclass(model):
        name = getattr(model, "__name__", type(model).__name__)
        raise MetadataError(f"{name} must be a dataclass type.")
    if model.__dataclass_params__.frozen:
        raise MetadataError(f"{model.__name__} is frozen; mapped fields must be settable.")

    hints = _model_type_hints(model)
    descriptors: List[FieldDescriptor] = []
    seen: Dict[str, str] = {}
    for field in fields(model):
        tag = _parse_tag(model, field)
        if tag is None:
            continue
        column, options = tag
        if column in seen:
            raise MetadataError(
                f"{model.__name__}.{field.name} and {model.__name__}.{seen[column]} "
                f"both map to column {column!r}."
            )
        seen[column] = field.name

        kind, optional, width = analyze_annotation(hints.get(field.name, field.type))
        descriptors.append(
            FieldDescriptor(
                column=column,
                attr=field.name,
                read_only="readonly" in options,
                unix="unix" in options,
                kind=kind,
                optional=optional,
                width=width,
            )
        )

    logger.debug("Resolved %s columns for %s", len(descriptors), model.__name__)
    return ModelMetadata(model=model, fields=tuple(descriptors))


def column_names(model: Type[Any]) -> List[str]:
    """Return mapped column names of a record type in declaration order."""

    return build_model_metadata(model).columns


def select_columns(
    model: Type[Any],
    *,
    table_alias: Optional[str] = None,
    prefix: str = "",
) -> str:
    """Render a SELECT column list for a record type.

    With `prefix`, columns are aliased as `prefix + column` so the list
    pairs with a prefix argument to `scan()`. Optional scalar fields bind by
    their bare column name in `scan()`, so they are aliased to it instead.
    """

    parts = []
    for descriptor in build_model_metadata(model).fields:
        column = descriptor.column
        source = f"{table_alias}.{column}" if table_alias else column
        if prefix and not descriptor.optional_scalar:
            parts.append(f"{source} AS {prefix}{column}")
        elif table_alias and prefix:
            parts.append(f"{source} AS {column}")
        else:
            parts.append(source)
    return ", ".join(parts)


def new_record(model: Type[T]) -> T:
    """Create a zero-valued instance of a dataclass record type.

    Fields with defaults keep them; required fields get the zero value of
    their annotation (`0`, `0.0`, `False`, `""`, `None` for optionals).
    """

    if not isinstance(model, type) or not is_dataclass(model):
        raise MetadataError(f"{getattr(model, '__name__', model)!r} must be a dataclass type.")

    hints = _model_type_hints(model)
    kwargs: Dict[str, Any] = {}
    for field in fields(model):
        if not field.init:
            continue
        if field.default is not MISSING or field.default_factory is not MISSING:
            continue
        kwargs[field.name] = _zero_value(hints.get(field.name, field.type))
    return model(**kwargs)


def analyze_annotation(annotation: Any) -> Tuple[FieldKind, bool, Optional[int]]:
    """Classify a field annotation into (kind, optional, width)."""

    base, optional = _unwrap_optional(annotation)
    base, width = _unwrap_width(base)

    if base is bool:
        return FieldKind.BOOL, optional, None
    if base is int:
        return FieldKind.INT, optional, width
    if base is float:
        return FieldKind.FLOAT, optional, width
    if base is str:
        return FieldKind.STR, optional, None
    if isinstance(base, type) and issubclass(base, datetime):
        return FieldKind.DATETIME, optional, None
    return FieldKind.OTHER, optional, None


def _parse_tag(model: Type[Any], field: Field[Any]) -> Optional[Tuple[str, frozenset[str]]]:
    raw = field.metadata.get(TAG_KEY)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise MetadataError(
            f"{model.__name__}.{field.name} metadata {TAG_KEY!r} must be a string, "
            f"got {type(raw).__name__}."
        )
    if raw.strip() == "-":
        return None

    column, *raw_options = [part.strip() for part in raw.split(",")]
    if not column:
        raise MetadataError(f"{model.__name__}.{field.name} has an empty column name.")

    options = frozenset(option for option in raw_options if option)
    unknown = options - _TAG_OPTIONS
    if unknown:
        raise MetadataError(
            f"Unsupported tag option(s) {sorted(unknown)!r} on {model.__name__}.{field.name}. "
            "Supported options: 'readonly', 'unix'."
        )
    return column, options


@lru_cache(maxsize=None)
def _model_type_hints(cls: Type[Any]) -> dict[str, Any]:
    try:
        return dict(get_type_hints(cls, include_extras=True))
    except Exception as exc:
        raise MetadataError(f"Cannot resolve type hints of {cls.__name__}: {exc}") from exc


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    origin = get_origin(annotation)
    if origin not in {Union, types.UnionType}:
        return annotation, False

    all_args = get_args(annotation)
    args = [arg for arg in all_args if arg is not type(None)]
    if len(args) == 1 and len(all_args) == 2:
        return args[0], True
    return annotation, False


def _unwrap_width(annotation: Any) -> Tuple[Any, Optional[int]]:
    if get_origin(annotation) is not Annotated:
        return annotation, None
    base, *extras = get_args(annotation)
    for extra in extras:
        if isinstance(extra, Width):
            return base, extra.bits
    return base, None


def _zero_value(annotation: Any) -> Any:
    kind, optional, _ = analyze_annotation(annotation)
    if optional:
        return None
    if kind is FieldKind.INT:
        return 0
    if kind is FieldKind.FLOAT:
        return 0.0
    if kind is FieldKind.BOOL:
        return False
    if kind is FieldKind.STR:
        return ""
    if kind is FieldKind.DATETIME:
        return datetime.fromtimestamp(0, tz=timezone.utc)

    base, _ = _unwrap_width(annotation)
    origin = get_origin(base) or base
    if isinstance(origin, type):
        try:
            return origin()
        except Exception:
            return None
    return None
