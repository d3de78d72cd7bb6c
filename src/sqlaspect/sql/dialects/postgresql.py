"""
PostgreSQL-specific SQL dialect implementation.

Double-quoted identifiers, ``$n`` numbered placeholders and RETURNING.
"""

from ...schema.types import TypeKind
from .base import Dialect


class PostgreSQLDialect(Dialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgres"
    quote_style = "double"
    placeholder_style = "numeric"
    supports_returning = True
    supports_nulls_ordering = True

    type_names = {
        **Dialect.type_names,
        TypeKind.REAL: "DOUBLE PRECISION",
    }
