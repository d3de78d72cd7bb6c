"""
Statement execution on a caller-owned SQLAlchemy connection.

The executor compiles a statement, sends it through
``Connection.exec_driver_sql`` in one round trip and hands the rows to the
result mapper. It never opens connections, begins, commits or rolls back
transactions, and never retries; connection and transaction lifecycle stay
with the caller:

    >>> engine = create_engine("sqlite://")
    >>> with engine.begin() as connection:
    ...     db = Executor(connection, dialect="sqlite")
    ...     db.execute(users.create())
    ...     db.execute(users.insert().values(admin))
    ...     user = db.query_one(users.select(), User)

The dialect must match the driver's parameter style (``sqlite`` for the
standard library driver, ``mysql`` for PyMySQL/mysqlclient, ``postgres`` for
drivers accepting ``$n`` placeholders such as asyncpg-backed connections).
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import DBAPIError

from sqlaspect.exceptions import ExecutionError
from sqlaspect.mapping.mapper import map_all, map_one, map_scalar
from sqlaspect.mapping.result import Result
from sqlaspect.sql.compiler import CompiledQuery
from sqlaspect.sql.dialects.base import Dialect
from sqlaspect.sql.dialects.registry import resolve_dialect
from sqlaspect.utils.logging import get_logger

logger = get_logger(__name__)


class Executor:
    """
    Runs compiled statements on an existing SQLAlchemy connection.

    Args:
        connection: Open SQLAlchemy ``Connection`` (owned by the caller)
        dialect: Dialect instance or registered name; defaults to the
            configured ``default_dialect``
    """

    def __init__(
        self, connection: Connection, dialect: Optional[Union[str, Dialect]] = None
    ) -> None:
        self.connection = connection
        self.dialect = resolve_dialect(dialect)

    def _run(self, statement: Any) -> "tuple[CompiledQuery, CursorResult]":
        compiled = statement.compile(self.dialect)
        try:
            cursor = self.connection.exec_driver_sql(compiled.sql, compiled.params)
        except DBAPIError as e:
            logger.error(
                "executor.statement_failed",
                dialect=self.dialect.name,
                statement=type(statement).__name__,
                error=str(e.orig) if e.orig is not None else str(e),
            )
            raise ExecutionError(
                f"statement failed: {e.orig if e.orig is not None else e}",
                sql=compiled.sql,
            ) from e

        logger.debug(
            "executor.statement_executed",
            dialect=self.dialect.name,
            statement=type(statement).__name__,
            param_count=len(compiled.params),
        )
        return compiled, cursor

    def execute(self, statement: Any) -> int:
        """
        Execute a statement and return the affected row count.

        Drivers report -1 when the count is unavailable (e.g. for DDL).
        """
        _, cursor = self._run(statement)
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def fetch(self, statement: Any) -> Result:
        """Execute a statement and return its rows as a ``Result``."""
        compiled, cursor = self._run(statement)
        if not cursor.returns_rows:
            cursor.close()
            raise ExecutionError("statement did not return rows", sql=compiled.sql)
        return Result.from_cursor(cursor)

    def query_one(self, statement: Any, destination: Any) -> Any:
        """Execute and map the first row into ``destination``."""
        return map_one(self.fetch(statement), destination)

    def query_all(self, statement: Any, destination: Any) -> List[Any]:
        """Execute and map every row into ``destination``, in result order."""
        return map_all(self.fetch(statement), destination)

    def query_scalar(self, statement: Any, type_: Any = None) -> Any:
        """Execute and return the single value of the first row."""
        return map_scalar(self.fetch(statement), type_)


__all__ = ["Executor"]
