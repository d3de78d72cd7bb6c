"""UPDATE statements."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from sqlaspect.schema.core import Column, Table
from sqlaspect.sql.expressions import Predicate

from .base import Statement, bind_values, check_scope, expand_columns, merge_where

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler


@dataclass(frozen=True, eq=False)
class Update(Statement):
    """An UPDATE of one table. Without a WHERE clause every row is updated."""

    table: Table
    assignments: Tuple[Tuple[Column, Any], ...] = ()
    where_clause: Optional[Predicate] = None
    returning_columns: Tuple[Column, ...] = ()

    def values(self, source: Any) -> "Update":
        """Set columns from a record or mapping, in declaration order."""
        columns, values = bind_values(self.table, self.table.columns, source)
        return replace(self, assignments=tuple(zip(columns, values)))

    def where(self, *predicates: Predicate) -> "Update":
        return replace(
            self, where_clause=merge_where(self.where_clause, predicates, (self.table,))
        )

    def returning(self, *items: Union[Column, Table]) -> "Update":
        columns = expand_columns(items)
        check_scope(columns, (self.table,), "RETURNING")
        return replace(self, returning_columns=columns)

    def _compile(self, compiler: "Compiler") -> str:
        if not self.assignments:
            raise compiler.fail(f"UPDATE of '{self.table.name}' has no values")
        set_sql = ", ".join(
            f"{compiler.column_name(col)} = {compiler.param(value)}"
            for col, value in self.assignments
        )
        sql = f"UPDATE {compiler.table(self.table)} SET {set_sql}"
        sql += compiler.where(self.where_clause)
        return sql + compiler.returning(self.returning_columns)
