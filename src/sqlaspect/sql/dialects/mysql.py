"""
MySQL-specific SQL dialect implementation.

Backtick-quoted identifiers and ``%s`` placeholders (PyMySQL, mysqlclient).
MySQL has no RETURNING clause and no NULLS FIRST/LAST ordering; statements
using either fail to compile.
"""

from ...schema.types import TypeKind
from .base import Dialect


class MySQLDialect(Dialect):
    """MySQL SQL dialect implementation."""

    name = "mysql"
    quote_style = "backtick"
    placeholder_style = "format"
    supports_returning = False
    supports_nulls_ordering = False
    default_string_length = 255
    unbounded_limit = "18446744073709551615"

    type_names = {
        **Dialect.type_names,
        TypeKind.INTEGER: "INT",
        TypeKind.REAL: "DOUBLE",
        TypeKind.TIMESTAMP: "DATETIME",
    }

    def timestamp_with_timezone(self) -> str:
        return "TIMESTAMP"
