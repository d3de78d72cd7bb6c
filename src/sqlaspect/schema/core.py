"""Schema model: tables, columns and constraints.

Tables are declared once, validated at construction time and never mutated
afterwards:

    >>> users = Table(
    ...     "users",
    ...     Column("id", Integer(not_null=True)),
    ...     Column("name", String(length=32, unique=True, not_null=True)),
    ...     Column("password", String(length=128)),
    ...     PrimaryKey("id"),
    ... )
    >>> users.c["id"].table is users
    True

Any inconsistency (duplicate or empty column names, constraints naming
unknown columns, more than one primary key) raises ``SchemaError`` from the
``Table(...)`` call itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from sqlaspect.exceptions import SchemaError, StatementError, UnknownColumnError
from sqlaspect.schema.types import ColumnType
from sqlaspect.sql.expressions import (
    BinaryPredicate,
    Ordering,
    RangePredicate,
    SetPredicate,
    UnaryPredicate,
)
from sqlaspect.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlaspect.schema.ddl_generator import CreateTable, DropTable
    from sqlaspect.sql.operations import Delete, Insert, Select, Update

logger = get_logger(__name__)


class Column:
    """A named, typed column.

    ``Column(name, type)`` creates an unbound declaration; ``Table`` binds a
    copy of it to itself, which is what ``table.c[...]`` returns.
    """

    __slots__ = ("_name", "_type", "_table")

    def __init__(self, name: str, type_: ColumnType, _table: Optional["Table"] = None):
        if not isinstance(type_, ColumnType):
            raise SchemaError(
                f"column type must be a ColumnType, got {type(type_).__name__}",
                column=name,
            )
        self._name = name
        self._type = type_
        self._table = _table

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> ColumnType:
        return self._type

    @property
    def table(self) -> Optional["Table"]:
        return self._table

    @property
    def is_primary(self) -> bool:
        """True when this column is part of its table's primary key."""
        return self._table is not None and self._name in self._table.primary_key

    def _bind(self, table: "Table") -> "Column":
        return Column(self._name, self._type, _table=table)

    def _require_table(self) -> "Table":
        if self._table is None:
            raise SchemaError(
                "column is not part of a table and cannot be used in a clause",
                column=self._name,
            )
        return self._table

    def __str__(self) -> str:
        if self._table is None:
            return self._name
        return f"{self._table.name}.{self._name}"

    def __repr__(self) -> str:
        return f"Column({str(self)!r}, {self._type!r})"

    # Comparison predicates

    def _compare(self, operator: str, value: Any) -> BinaryPredicate:
        self._require_table()
        return BinaryPredicate(self, operator, value)

    def equals(self, value: Any) -> BinaryPredicate:
        return self._compare("=", value)

    def does_not_equal(self, value: Any) -> BinaryPredicate:
        return self._compare("<>", value)

    def less_than(self, value: Any) -> BinaryPredicate:
        return self._compare("<", value)

    def greater_than(self, value: Any) -> BinaryPredicate:
        return self._compare(">", value)

    def lte(self, value: Any) -> BinaryPredicate:
        return self._compare("<=", value)

    def gte(self, value: Any) -> BinaryPredicate:
        return self._compare(">=", value)

    def like(self, pattern: str) -> BinaryPredicate:
        return self._compare("LIKE", pattern)

    def in_(self, values: Sequence[Any]) -> SetPredicate:
        return self._set(values, negated=False)

    def not_in(self, values: Sequence[Any]) -> SetPredicate:
        return self._set(values, negated=True)

    def _set(self, values: Sequence[Any], negated: bool) -> SetPredicate:
        table = self._require_table()
        # A string is a sequence of characters, never a value list
        if isinstance(values, (str, bytes)):
            raise StatementError(
                "IN requires a sequence of values, got a string",
                table=table.name,
                column=self._name,
            )
        return SetPredicate(self, tuple(values), negated=negated)

    def between(self, low: Any, high: Any) -> RangePredicate:
        self._require_table()
        return RangePredicate(self, low, high)

    def is_null(self) -> UnaryPredicate:
        self._require_table()
        return UnaryPredicate(self, "IS NULL")

    def is_not_null(self) -> UnaryPredicate:
        self._require_table()
        return UnaryPredicate(self, "IS NOT NULL")

    # Orderings

    def asc(self, nulls_first: Optional[bool] = None) -> Ordering:
        self._require_table()
        return Ordering(self, descending=False, nulls_first=nulls_first)

    def desc(self, nulls_first: Optional[bool] = None) -> Ordering:
        self._require_table()
        return Ordering(self, descending=True, nulls_first=nulls_first)


@dataclass(frozen=True)
class PrimaryKey:
    """Table-level primary key over one or more columns."""

    columns: Tuple[str, ...]

    def __init__(self, *names: str):
        object.__setattr__(self, "columns", tuple(names))


@dataclass(frozen=True)
class Unique:
    """Table-level unique constraint over one or more columns."""

    columns: Tuple[str, ...]

    def __init__(self, *names: str):
        object.__setattr__(self, "columns", tuple(names))


class ColumnCollection:
    """Read-only, ordered access to a table's columns by name.

    Supports ``c["name"]``, ``c.name``, iteration in declaration order,
    ``len`` and ``in``.
    """

    __slots__ = ("_table_name", "_columns", "_by_name")

    def __init__(self, table_name: str, columns: Sequence[Column]):
        self._table_name = table_name
        self._columns = tuple(columns)
        self._by_name: Dict[str, Column] = {col.name: col for col in columns}

    def __getitem__(self, name: str) -> Column:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownColumnError(
                "no such column", table=self._table_name, column=name
            ) from None

    def __getattr__(self, name: str) -> Column:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def keys(self) -> List[str]:
        return [col.name for col in self._columns]


TableItem = Union[Column, PrimaryKey, Unique]


class Table:
    """A validated table declaration.

    Args:
        name: Table name (non-empty)
        *items: ``Column``, ``PrimaryKey`` and ``Unique`` declarations. Column
            order is preserved and is the order used by every generated column
            list.

    Raises:
        SchemaError: If the declaration is inconsistent
    """

    def __init__(self, name: str, *items: TableItem):
        if not name:
            raise SchemaError("table name must be a non-empty string")

        declared: List[Column] = []
        primary_keys: List[Tuple[str, ...]] = []
        explicit_uniques: List[Tuple[str, ...]] = []

        for item in items:
            if isinstance(item, Column):
                declared.append(item)
            elif isinstance(item, PrimaryKey):
                primary_keys.append(item.columns)
            elif isinstance(item, Unique):
                explicit_uniques.append(item.columns)
            else:
                raise SchemaError(
                    f"unsupported table item of type {type(item).__name__}",
                    table=name,
                )

        seen: set = set()
        for col in declared:
            if not col.name:
                raise SchemaError("column name must be a non-empty string", table=name)
            if col.name in seen:
                raise SchemaError("duplicate column name", table=name, column=col.name)
            if col.table is not None:
                raise SchemaError(
                    f"column already belongs to table '{col.table.name}'",
                    table=name,
                    column=col.name,
                )
            seen.add(col.name)

        marker_pks = [(col.name,) for col in declared if col.type.primary_key]
        if len(primary_keys) + len(marker_pks) > 1:
            raise SchemaError("multiple primary keys declared", table=name)
        all_pks = primary_keys + marker_pks

        marker_uniques = [(col.name,) for col in declared if col.type.unique]
        uniques = marker_uniques + explicit_uniques

        for kind, constraint in [("primary key", pk) for pk in all_pks] + [
            ("unique constraint", u) for u in uniques
        ]:
            self._validate_constraint(name, kind, constraint, seen)

        self._name = name
        self._columns = tuple(col._bind(self) for col in declared)
        self._c = ColumnCollection(name, self._columns)
        self._primary_key: Tuple[str, ...] = all_pks[0] if all_pks else ()
        self._uniques: Tuple[Tuple[str, ...], ...] = tuple(uniques)

        logger.debug(
            "schema.table_declared",
            table=name,
            column_count=len(self._columns),
            primary_key=list(self._primary_key),
            unique_count=len(self._uniques),
        )

    @staticmethod
    def _validate_constraint(
        table: str, kind: str, constraint: Tuple[str, ...], columns: set
    ) -> None:
        if not constraint:
            raise SchemaError(f"{kind} must name at least one column", table=table)
        if len(set(constraint)) != len(constraint):
            raise SchemaError(f"{kind} names a column more than once", table=table)
        for col_name in constraint:
            if col_name not in columns:
                raise SchemaError(
                    f"{kind} references an unknown column", table=table, column=col_name
                )

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> Tuple[Column, ...]:
        return self._columns

    @property
    def c(self) -> ColumnCollection:
        return self._c

    @property
    def primary_key(self) -> Tuple[str, ...]:
        return self._primary_key

    @property
    def uniques(self) -> Tuple[Tuple[str, ...], ...]:
        return self._uniques

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Table({self._name!r}, columns={self._c.keys()!r})"

    # Statement entry points

    def select(self) -> "Select":
        from sqlaspect.sql.operations import select

        return select(self)

    def insert(self) -> "Insert":
        from sqlaspect.sql.operations import insert

        return insert(self)

    def update(self) -> "Update":
        from sqlaspect.sql.operations import Update

        return Update(table=self)

    def delete(self) -> "Delete":
        from sqlaspect.sql.operations import Delete

        return Delete(table=self)

    def create(self, if_not_exists: bool = False) -> "CreateTable":
        from sqlaspect.schema.ddl_generator import CreateTable

        return CreateTable(table=self, if_not_exists=if_not_exists)

    def drop(self, if_exists: bool = False) -> "DropTable":
        from sqlaspect.schema.ddl_generator import DropTable

        return DropTable(table=self, if_exists=if_exists)


__all__ = [
    "Column",
    "ColumnCollection",
    "PrimaryKey",
    "Unique",
    "Table",
]
