"""INSERT statements."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple, Union

from sqlaspect.exceptions import StatementError
from sqlaspect.mapping.binding import is_named_tuple
from sqlaspect.schema.core import Column, Table

from .base import Statement, bind_values, check_scope, expand_columns

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler


@dataclass(frozen=True, eq=False)
class Insert(Statement):
    """
    An INSERT into one table.

    ``targets`` are the columns values may bind to; ``bound`` are the columns
    actually present in the values, in declaration order.
    """

    table: Table
    targets: Tuple[Column, ...]
    bound: Tuple[Column, ...] = ()
    rows: Tuple[Tuple[Any, ...], ...] = ()
    returning_columns: Tuple[Column, ...] = ()

    def values(self, source: Any) -> "Insert":
        """
        Bind values from a record, a mapping, or a list of either.

        A list (or a plain tuple) is a multi-row insert; a named tuple is a
        single record.

        Target columns without a counterpart in the source are left out of
        the column list. Every row of a multi-row insert must bind the same
        columns.
        """
        many = isinstance(source, list) or (
            isinstance(source, tuple) and not is_named_tuple(source)
        )
        sources: Sequence[Any] = source if many else [source]
        if not sources:
            raise StatementError("values() requires at least one row", table=self.table.name)

        bound: Tuple[Column, ...] = ()
        rows: List[Tuple[Any, ...]] = []
        for index, item in enumerate(sources):
            columns, row = bind_values(self.table, self.targets, item)
            if index == 0:
                bound = columns
            elif columns != bound:
                raise StatementError(
                    f"row {index} binds columns {[c.name for c in columns]}, "
                    f"expected {[c.name for c in bound]}",
                    table=self.table.name,
                )
            rows.append(row)
        return replace(self, bound=bound, rows=tuple(rows))

    def returning(self, *items: Union[Column, Table]) -> "Insert":
        """Fetch columns of the inserted rows in the same round trip."""
        columns = expand_columns(items)
        check_scope(columns, (self.table,), "RETURNING")
        return replace(self, returning_columns=columns)

    def _compile(self, compiler: "Compiler") -> str:
        if not self.rows:
            raise compiler.fail(f"INSERT into '{self.table.name}' has no values")
        row_sql = []
        for row in self.rows:
            row_sql.append("(" + ", ".join(compiler.param(v) for v in row) + ")")
        sql = (
            f"INSERT INTO {compiler.table(self.table)} "
            f"({compiler.column_list(self.bound, qualified=False)}) "
            f"VALUES {', '.join(row_sql)}"
        )
        return sql + compiler.returning(self.returning_columns)


def insert(*items: Union[Column, Table]) -> Insert:
    """
    Build an INSERT targeting the given columns (a table means all of them).

    All columns must belong to the same table.
    """
    columns = expand_columns(items)
    tables = [item for item in items if isinstance(item, Table)]
    tables += [col.table for col in columns]
    if not tables:
        raise StatementError("insert() requires at least one column or table")
    table = tables[0]
    check_scope(columns, (table,), "INSERT")
    return Insert(table=table, targets=columns)
