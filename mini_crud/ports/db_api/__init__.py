"""DB-API adapter exports."""

from .cursor import DBAPIRowCursor
from .database import Database

__all__ = [
    "DBAPIRowCursor",
    "Database",
]
