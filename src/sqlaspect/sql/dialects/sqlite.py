"""
SQLite-specific SQL dialect implementation.

Uses the ``?`` placeholder understood by the standard library ``sqlite3``
driver. RETURNING requires SQLite 3.35 or newer at execution time.
"""

from ...schema.types import TypeKind
from .base import Dialect


class SQLiteDialect(Dialect):
    """SQLite SQL dialect implementation."""

    name = "sqlite"
    quote_style = "double"
    placeholder_style = "qmark"
    supports_returning = True
    supports_nulls_ordering = True
    unbounded_limit = "-1"

    type_names = {
        **Dialect.type_names,
        # SQLite only aliases INTEGER PRIMARY KEY to the rowid
        TypeKind.BIGINT: "INTEGER",
    }

    def timestamp_with_timezone(self) -> str:
        return "TIMESTAMP"
