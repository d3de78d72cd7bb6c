"""SELECT statements."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from sqlaspect.exceptions import StatementError
from sqlaspect.schema.core import Column, Table
from sqlaspect.sql.expressions import Ordering, Predicate

from .base import Statement, check_scope, expand_columns, merge_where

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler


@dataclass(frozen=True, eq=False)
class Select(Statement):
    """
    A SELECT over one or more tables.

    The FROM list holds every table whose columns are selected, each once, in
    order of first appearance.
    """

    columns: Tuple[Column, ...]
    tables: Tuple[Table, ...]
    where_clause: Optional[Predicate] = None
    ordering: Tuple[Ordering, ...] = ()
    limit_count: Optional[int] = None
    offset_count: Optional[int] = None

    def where(self, *predicates: Predicate) -> "Select":
        """Filter rows; several predicates (and repeated calls) are ANDed."""
        return replace(
            self, where_clause=merge_where(self.where_clause, predicates, self.tables)
        )

    def order_by(self, *orderings: Union[Ordering, Column]) -> "Select":
        """Append orderings; a bare column sorts ascending."""
        added: List[Ordering] = []
        for item in orderings:
            if isinstance(item, Column):
                item = item.asc()
            if not isinstance(item, Ordering):
                raise StatementError(
                    f"order_by() expects columns or orderings, got {type(item).__name__}"
                )
            added.append(item)
        check_scope((o.column for o in added), self.tables, "ORDER BY")
        return replace(self, ordering=self.ordering + tuple(added))

    def limit(self, count: int) -> "Select":
        return replace(self, limit_count=_non_negative("limit", count))

    def offset(self, count: int) -> "Select":
        return replace(self, offset_count=_non_negative("offset", count))

    def _compile(self, compiler: "Compiler") -> str:
        if not self.columns:
            raise compiler.fail("SELECT requires at least one column")
        tables = ", ".join(compiler.table(t) for t in self.tables)
        sql = f"SELECT {compiler.column_list(self.columns)} FROM {tables}"
        sql += compiler.where(self.where_clause)
        if self.ordering:
            sql += " ORDER BY " + ", ".join(compiler.ordering(o) for o in self.ordering)
        if self.limit_count is not None:
            sql += f" LIMIT {self.limit_count}"
        elif self.offset_count is not None and compiler.dialect.unbounded_limit:
            # SQLite and MySQL only accept OFFSET after a LIMIT
            sql += f" LIMIT {compiler.dialect.unbounded_limit}"
        if self.offset_count is not None:
            sql += f" OFFSET {self.offset_count}"
        return sql


def _non_negative(name: str, count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise StatementError(f"{name}() requires a non-negative integer, got {count!r}")
    return count


def select(*items: Union[Column, Table]) -> Select:
    """
    Build a SELECT of the given columns; a table stands for all its columns.

    Example:
        >>> select(users.c["id"]).order_by(users.c["id"].desc())
    """
    if not items:
        raise StatementError("select() requires at least one column or table")
    tables: List[Table] = []
    for item in items:
        table = item if isinstance(item, Table) else getattr(item, "table", None)
        if table is not None and not any(table is t for t in tables):
            tables.append(table)
    return Select(columns=expand_columns(items), tables=tuple(tables))
