"""Configuration value passed to mutation entry points."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .types import PlaceholderFormatter


def qmark_placeholder(ordinal: int) -> str:
    """Return the non-positional `?` marker for every ordinal."""

    return "?"


def format_placeholder(ordinal: int) -> str:
    """Return the `%s` marker used by `format` paramstyle drivers."""

    return "%s"


def numeric_placeholder(ordinal: int) -> str:
    """Return a `:1`, `:2`, ... marker."""

    return f":{ordinal}"


def dollar_placeholder(ordinal: int) -> str:
    """Return a `$1`, `$2`, ... marker."""

    return f"${ordinal}"


_PARAMSTYLE_PLACEHOLDERS = {
    "qmark": qmark_placeholder,
    "format": format_placeholder,
    "pyformat": format_placeholder,
    "numeric": numeric_placeholder,
    "dollar": dollar_placeholder,
}


def placeholder_for_paramstyle(paramstyle: str) -> PlaceholderFormatter:
    """Return placeholder formatter for a DB-API `paramstyle` name.

    Only positional styles are supported since bind values are always an
    ordered list.
    """

    try:
        return _PARAMSTYLE_PLACEHOLDERS[paramstyle]
    except KeyError:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}") from None


@dataclass(frozen=True)
class CrudConfig:
    """Switches that shape generated statements and result handling.

    Attributes:
        enable_upsert: Emit a real upsert statement; when false `upsert()`
            degrades to `insert()`.
        tolerate_missing_insert_id: Return `0` instead of raising when the
            backend cannot report a generated id.
        placeholder: Formatter called with a 1-based ordinal per bound value.
        conflict_clause: Text placed between `VALUES (...)` and the upsert
            assignments. `{id_column}` is substituted.
    """

    enable_upsert: bool = False
    tolerate_missing_insert_id: bool = False
    placeholder: PlaceholderFormatter = qmark_placeholder
    conflict_clause: str = "ON DUPLICATE KEY UPDATE"

    @classmethod
    def for_paramstyle(cls, paramstyle: str, **overrides: Any) -> CrudConfig:
        return cls(placeholder=placeholder_for_paramstyle(paramstyle), **overrides)

    def with_options(self, **changes: Any) -> CrudConfig:
        """Return a copy with selected switches changed."""

        return replace(self, **changes)


DEFAULT_CONFIG = CrudConfig()


def resolve_config(config: CrudConfig | None) -> CrudConfig:
    return DEFAULT_CONFIG if config is None else config
