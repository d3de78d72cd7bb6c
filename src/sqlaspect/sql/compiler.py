"""
Statement compiler.

``compile_statement(statement, dialect)`` renders any statement into a
``CompiledQuery``: SQL text plus the ordered parameter tuple. Every literal
value becomes a positional parameter; the placeholder is emitted at the same
moment the value is appended, so SQL text and parameter positions always
agree. All mutable state lives on a ``Compiler`` created per call, which keeps
compilation deterministic: the same statement and dialect always yield the
same SQL and parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Sequence, Tuple

from sqlaspect.exceptions import CompileError
from sqlaspect.sql.core.parameters import ParameterList
from sqlaspect.sql.dialects.base import Dialect
from sqlaspect.sql.expressions import (
    BinaryPredicate,
    Compound,
    Not,
    Ordering,
    Predicate,
    RangePredicate,
    SetPredicate,
    UnaryPredicate,
)
from sqlaspect.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlaspect.schema.core import Column, Table

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompiledQuery:
    """Rendered SQL text and its ordered parameters."""

    sql: str
    params: Tuple[Any, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        # Allows ``sql, params = statement.compile(dialect)``
        yield self.sql
        yield self.params

    def __str__(self) -> str:
        return self.sql


class Compiler:
    """Per-compilation rendering state for one dialect."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.params = ParameterList(dialect.placeholder_style)

    def fail(self, message: str) -> CompileError:
        return CompileError(message, dialect=self.dialect.name)

    def param(self, value: Any) -> str:
        return self.params.add(value)

    def table(self, table: "Table") -> str:
        return self.dialect.quote(table.name)

    def column(self, column: "Column") -> str:
        """Fully qualified ``"table"."column"`` reference."""
        table = column.table
        return self.dialect.qualify(table.name if table is not None else None, column.name)

    def column_name(self, column: "Column") -> str:
        """Bare quoted column name, as used by INSERT/UPDATE target lists."""
        return self.dialect.quote(column.name)

    def column_list(self, columns: Sequence["Column"], qualified: bool = True) -> str:
        render = self.column if qualified else self.column_name
        return ", ".join(render(col) for col in columns)

    def predicate(self, predicate: Predicate, nested: bool = False) -> str:
        if isinstance(predicate, BinaryPredicate):
            return f"{self.column(predicate.column)} {predicate.operator} {self.param(predicate.value)}"

        if isinstance(predicate, UnaryPredicate):
            return f"{self.column(predicate.column)} {predicate.operator}"

        if isinstance(predicate, SetPredicate):
            if not predicate.values:
                raise self.fail(f"IN requires at least one value for column '{predicate.column}'")
            placeholders = ", ".join(self.param(v) for v in predicate.values)
            keyword = "NOT IN" if predicate.negated else "IN"
            return f"{self.column(predicate.column)} {keyword} ({placeholders})"

        if isinstance(predicate, RangePredicate):
            low = self.param(predicate.low)
            high = self.param(predicate.high)
            return f"{self.column(predicate.column)} BETWEEN {low} AND {high}"

        if isinstance(predicate, Compound):
            if len(predicate.clauses) == 1:
                return self.predicate(predicate.clauses[0], nested=nested)
            joined = f" {predicate.conjunction} ".join(
                self.predicate(clause, nested=True) for clause in predicate.clauses
            )
            return f"({joined})" if nested else joined

        if isinstance(predicate, Not):
            return f"NOT ({self.predicate(predicate.clause)})"

        raise self.fail(f"unsupported predicate type {type(predicate).__name__}")

    def where(self, predicate: Any) -> str:
        if predicate is None:
            return ""
        return f" WHERE {self.predicate(predicate)}"

    def ordering(self, ordering: Ordering) -> str:
        sql = f"{self.column(ordering.column)} {'DESC' if ordering.descending else 'ASC'}"
        if ordering.nulls_first is not None:
            if not self.dialect.supports_nulls_ordering:
                raise self.fail("NULLS FIRST/LAST ordering is not supported")
            sql += " NULLS FIRST" if ordering.nulls_first else " NULLS LAST"
        return sql

    def returning(self, columns: Sequence["Column"]) -> str:
        if not columns:
            return ""
        if not self.dialect.supports_returning:
            raise self.fail("RETURNING is not supported")
        return f" RETURNING {self.column_list(columns, qualified=False)}"


def compile_statement(statement: Any, dialect: Dialect) -> CompiledQuery:
    """
    Compile a statement for a dialect.

    Args:
        statement: Any statement value (Select, Insert, Update, Delete,
            CreateTable, DropTable)
        dialect: Dialect instance

    Returns:
        CompiledQuery with SQL text and parameters

    Raises:
        CompileError: If the statement uses a feature the dialect lacks or is
            incomplete (e.g. an INSERT without values)
    """
    compile_method = getattr(statement, "_compile", None)
    if compile_method is None:
        raise CompileError(
            f"cannot compile object of type {type(statement).__name__}",
            dialect=dialect.name,
        )

    compiler = Compiler(dialect)
    sql = compile_method(compiler)
    compiled = CompiledQuery(sql=sql, params=compiler.params.values())

    logger.debug(
        "statement.compiled",
        dialect=dialect.name,
        statement=type(statement).__name__,
        param_count=len(compiled.params),
    )
    return compiled


__all__ = ["CompiledQuery", "Compiler", "compile_statement"]
