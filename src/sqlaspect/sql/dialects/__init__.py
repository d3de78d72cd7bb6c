"""SQL dialects and the dialect registry."""

from .base import Dialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect
from .registry import (
    get_dialect,
    list_dialects,
    register_dialect,
    resolve_dialect,
    unregister_dialect,
)
from .sqlite import SQLiteDialect

__all__ = [
    "Dialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "MySQLDialect",
    "register_dialect",
    "unregister_dialect",
    "get_dialect",
    "list_dialects",
    "resolve_dialect",
]
