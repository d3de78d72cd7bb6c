"""DELETE statements."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional, Tuple, Union

from sqlaspect.schema.core import Column, Table
from sqlaspect.sql.expressions import Predicate

from .base import Statement, check_scope, expand_columns, merge_where

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler


@dataclass(frozen=True, eq=False)
class Delete(Statement):
    """A DELETE from one table. Without a WHERE clause every row is deleted."""

    table: Table
    where_clause: Optional[Predicate] = None
    returning_columns: Tuple[Column, ...] = ()

    def where(self, *predicates: Predicate) -> "Delete":
        return replace(
            self, where_clause=merge_where(self.where_clause, predicates, (self.table,))
        )

    def returning(self, *items: Union[Column, Table]) -> "Delete":
        columns = expand_columns(items)
        check_scope(columns, (self.table,), "RETURNING")
        return replace(self, returning_columns=columns)

    def _compile(self, compiler: "Compiler") -> str:
        sql = f"DELETE FROM {compiler.table(self.table)}"
        sql += compiler.where(self.where_clause)
        return sql + compiler.returning(self.returning_columns)
