"""
Base SQL dialect.

A dialect is the set of rendering rules for one database family: identifier
quoting, placeholder syntax, optional clause support and DDL type names.
Concrete dialects only override class attributes and the occasional type
rendering hook.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from ...schema.types import ColumnType, String, Timestamp, TypeKind
from ..core.identifier import qualify_column, quote_identifier

if TYPE_CHECKING:
    from ..compiler import CompiledQuery


class Dialect:
    """Rendering rules shared by every dialect."""

    name: str = "generic"
    quote_style: str = "double"
    placeholder_style: str = "numeric"
    supports_returning: bool = False
    supports_nulls_ordering: bool = False
    default_string_length: Optional[int] = None
    # LIMIT value meaning "all rows", for OFFSET without LIMIT
    unbounded_limit: Optional[str] = None

    type_names: Dict[TypeKind, str] = {
        TypeKind.INTEGER: "INTEGER",
        TypeKind.BIGINT: "BIGINT",
        TypeKind.REAL: "REAL",
        TypeKind.BOOLEAN: "BOOLEAN",
        TypeKind.STRING: "VARCHAR",
        TypeKind.TEXT: "TEXT",
        TypeKind.DATE: "DATE",
        TypeKind.TIMESTAMP: "TIMESTAMP",
    }

    def quote(self, identifier: str) -> str:
        """Quote an identifier using this dialect's quoting style."""
        return quote_identifier(identifier, style=self.quote_style)

    def qualify(self, table: Optional[str], column: str) -> str:
        """Render a ``table.column`` reference."""
        return qualify_column(table, column, style=self.quote_style)

    def type_sql(self, column_type: ColumnType) -> str:
        """Convert a column type to its DDL type name."""
        base = self.type_names[column_type.kind]
        if isinstance(column_type, String):
            length = column_type.length or self.default_string_length
            return f"{base}({length})" if length else base
        if isinstance(column_type, Timestamp) and column_type.with_timezone:
            return self.timestamp_with_timezone()
        return base

    def timestamp_with_timezone(self) -> str:
        return "TIMESTAMP WITH TIME ZONE"

    def compile(self, statement) -> "CompiledQuery":
        """Compile a statement with this dialect."""
        from ..compiler import compile_statement

        return compile_statement(statement, self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
