"""DDL SQL generation for declared tables.

``Table.create()`` and ``Table.drop()`` return statements that compile like
any other statement, with dialect-specific quoting and type names:

    CREATE TABLE "users" (
      "id" INTEGER NOT NULL,
      "name" VARCHAR(32) NOT NULL,
      "password" VARCHAR(128),
      PRIMARY KEY ("id"),
      UNIQUE ("name")
    );

DDL never carries parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

from sqlaspect.schema.core import Column, Table
from sqlaspect.sql.operations.base import Statement

if TYPE_CHECKING:
    from sqlaspect.sql.compiler import Compiler


def _column_ddl(compiler: "Compiler", col: Column) -> str:
    """Render one column definition line."""
    sql_type = compiler.dialect.type_sql(col.type)
    not_null = " NOT NULL" if col.type.not_null else ""
    return f"{compiler.column_name(col)} {sql_type}{not_null}"


def _constraint_columns(compiler: "Compiler", names: Sequence[str]) -> str:
    return ", ".join(compiler.dialect.quote(name) for name in names)


def generate_create_table_ddl(
    compiler: "Compiler", table: Table, if_not_exists: bool = False
) -> str:
    """Generate the CREATE TABLE statement for a table."""
    lines: List[str] = [_column_ddl(compiler, col) for col in table.columns]
    if table.primary_key:
        lines.append(f"PRIMARY KEY ({_constraint_columns(compiler, table.primary_key)})")
    for unique in table.uniques:
        lines.append(f"UNIQUE ({_constraint_columns(compiler, unique)})")

    if not lines:
        raise compiler.fail(f"cannot create table '{table.name}' without columns")

    exists_clause = "IF NOT EXISTS " if if_not_exists else ""
    body = ",\n".join(f"  {line}" for line in lines)
    return f"CREATE TABLE {exists_clause}{compiler.table(table)} (\n{body}\n);"


def generate_drop_table_ddl(
    compiler: "Compiler", table: Table, if_exists: bool = False
) -> str:
    """Generate the DROP TABLE statement for a table."""
    exists_clause = "IF EXISTS " if if_exists else ""
    return f"DROP TABLE {exists_clause}{compiler.table(table)}"


@dataclass(frozen=True, eq=False)
class CreateTable(Statement):
    table: Table
    if_not_exists: bool = False

    def _compile(self, compiler: "Compiler") -> str:
        return generate_create_table_ddl(compiler, self.table, self.if_not_exists)


@dataclass(frozen=True, eq=False)
class DropTable(Statement):
    table: Table
    if_exists: bool = False

    def _compile(self, compiler: "Compiler") -> str:
        return generate_drop_table_ddl(compiler, self.table, self.if_exists)


__all__ = [
    "CreateTable",
    "DropTable",
    "generate_create_table_ddl",
    "generate_drop_table_ddl",
]
