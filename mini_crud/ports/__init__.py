"""Public port exports for concrete adapter implementations."""

from .db_api import Database, DBAPIRowCursor

__all__ = [
    "Database",
    "DBAPIRowCursor",
]
