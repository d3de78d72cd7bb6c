"""
Exception hierarchy for sqlaspect.

Two regimes are kept apart:

- ``DeclarationError`` and its subclasses are raised synchronously while a
  schema, statement or destination binding is being declared. They indicate a
  programming mistake and are expected to surface once, at import or setup time.
- ``QueryError`` and its subclasses are raised while compiling, executing or
  mapping a query. They depend on runtime data and are meant to be handled by
  the caller.
"""

from typing import Optional


def _with_context(message: str, **context: Optional[str]) -> str:
    parts = [f"{key}='{value}'" for key, value in context.items() if value]
    if parts:
        return f"{message} ({', '.join(parts)})"
    return message


class SqlAspectError(Exception):
    """Base exception for all sqlaspect errors."""

    pass


class DeclarationError(SqlAspectError):
    """Base exception for schema and statement declaration failures."""

    pass


class SchemaError(DeclarationError):
    """
    Raised when a table, column or constraint declaration is invalid.

    Args:
        message: Error description
        table: Name of the table being declared (optional)
        column: Name of the offending column (optional)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ):
        self.table = table
        self.column = column
        super().__init__(_with_context(message, table=table, column=column))


class UnknownColumnError(SchemaError):
    """Raised when a column is looked up on a table that does not declare it."""

    pass


class StatementError(DeclarationError):
    """
    Raised when a statement is assembled with an invalid clause.

    Typical causes are referencing a column outside the statement's tables or
    passing values that bind to nothing.
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ):
        self.table = table
        self.column = column
        super().__init__(_with_context(message, table=table, column=column))


class BindingError(DeclarationError):
    """Raised when a destination type declares an inconsistent column binding."""

    def __init__(self, message: str, destination: Optional[str] = None):
        self.destination = destination
        super().__init__(_with_context(message, destination=destination))


class QueryError(SqlAspectError):
    """Base exception for compilation, execution and mapping failures."""

    pass


class CompileError(QueryError):
    """
    Raised when a statement cannot be rendered for a dialect.

    Args:
        message: Error description
        dialect: Name of the dialect used for compilation (optional)
    """

    def __init__(self, message: str, dialect: Optional[str] = None):
        self.dialect = dialect
        super().__init__(_with_context(message, dialect=dialect))


class MappingError(QueryError):
    """
    Raised when a result cannot be mapped into the requested destination.

    Args:
        message: Error description
        column: Result column being mapped when the error occurred (optional)
        destination: Name of the destination type (optional)
    """

    def __init__(
        self,
        message: str,
        column: Optional[str] = None,
        destination: Optional[str] = None,
    ):
        self.column = column
        self.destination = destination
        super().__init__(
            _with_context(message, column=column, destination=destination)
        )


class NoResultError(MappingError):
    """Raised when a result has no rows but one was required."""

    pass


class ExecutionError(QueryError):
    """Raised when the database driver rejects a compiled query."""

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)


__all__ = [
    "SqlAspectError",
    "DeclarationError",
    "SchemaError",
    "UnknownColumnError",
    "StatementError",
    "BindingError",
    "QueryError",
    "CompileError",
    "MappingError",
    "NoResultError",
    "ExecutionError",
]
