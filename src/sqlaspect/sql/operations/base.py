"""
Shared statement behaviour.

Statements are frozen dataclasses. Every builder method returns a new
statement built with ``dataclasses.replace``; the receiver is never changed,
so a partially built statement can be reused as a template.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from sqlaspect.exceptions import StatementError
from sqlaspect.mapping.binding import record_values
from sqlaspect.schema.core import Column, Table
from sqlaspect.sql.compiler import CompiledQuery, compile_statement
from sqlaspect.sql.dialects.registry import resolve_dialect
from sqlaspect.sql.expressions import Predicate, all_of

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler
    from sqlaspect.sql.dialects.base import Dialect


class Statement:
    """Base class for every compilable statement."""

    def compile(self, dialect: Optional[Union[str, "Dialect"]] = None) -> CompiledQuery:
        """
        Compile this statement.

        Args:
            dialect: Dialect instance or registered name; defaults to the
                configured ``default_dialect``
        """
        return compile_statement(self, resolve_dialect(dialect))

    def _compile(self, compiler: "Compiler") -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.compile().sql


def expand_columns(items: Iterable[Union[Column, Table]]) -> Tuple[Column, ...]:
    """Expand tables into their columns, keeping the given order."""
    columns: List[Column] = []
    for item in items:
        if isinstance(item, Table):
            columns.extend(item.columns)
        elif isinstance(item, Column):
            if item.table is None:
                raise StatementError(
                    "column is not part of a table", column=item.name
                )
            columns.append(item)
        else:
            raise StatementError(
                f"expected a Column or Table, got {type(item).__name__}"
            )
    return tuple(columns)


def check_scope(
    columns: Iterable[Column], tables: Sequence[Table], clause: str
) -> None:
    """Ensure every column belongs to one of the statement's tables."""
    for col in columns:
        if not any(col.table is table for table in tables):
            owner = col.table.name if col.table is not None else None
            raise StatementError(
                f"{clause} references a column outside the statement's tables",
                table=owner,
                column=col.name,
            )


def merge_where(
    current: Optional[Predicate], predicates: Sequence[Predicate], tables: Sequence[Table]
) -> Predicate:
    if not predicates:
        raise StatementError("where() requires at least one predicate")
    for predicate in predicates:
        if not isinstance(predicate, Predicate):
            raise StatementError(
                f"where() expects predicates, got {type(predicate).__name__}"
            )
        check_scope(predicate.columns(), tables, "WHERE")
    clauses = ((current,) if current is not None else ()) + tuple(predicates)
    if len(clauses) == 1:
        return clauses[0]
    return all_of(*clauses)


def bind_values(
    table: Table, targets: Sequence[Column], source: Any
) -> Tuple[Tuple[Column, ...], Tuple[Any, ...]]:
    """
    Bind a record or mapping to target columns.

    Columns are taken in target (declaration) order, so an unordered mapping
    always produces the same column list.

    Returns:
        Tuple of (bound columns, values in the same order)

    Raises:
        StatementError: If a mapping names a column that is not a target, or
            nothing binds at all
    """
    try:
        values: Dict[str, Any] = record_values(source)
    except TypeError as e:
        raise StatementError(str(e), table=table.name) from e

    target_names = {col.name for col in targets}
    if isinstance(source, Mapping):
        for key in values:
            if key not in target_names:
                raise StatementError(
                    "values() names a column that is not a target of this statement",
                    table=table.name,
                    column=str(key),
                )

    bound = tuple(col for col in targets if col.name in values)
    if not bound:
        raise StatementError("values() did not bind any column", table=table.name)
    return bound, tuple(values[col.name] for col in bound)
