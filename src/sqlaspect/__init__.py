"""
sqlaspect - SQL statement builder and schema description.

Declare tables once, build immutable statements from them, compile them into
dialect-specific SQL with positional parameters and map result rows back into
dataclasses, pydantic models or scalars.

    >>> users = Table(
    ...     "users",
    ...     Column("id", Integer(not_null=True)),
    ...     Column("name", String(length=32, unique=True, not_null=True)),
    ...     PrimaryKey("id"),
    ... )
    >>> users.delete().where(users.c["id"].equals(1)).compile("postgres")
    CompiledQuery(sql='DELETE FROM "users" WHERE "users"."id" = $1', params=(1,))
"""

__version__ = "0.1.0"

# schema must be imported before the statement builders that depend on it
from sqlaspect.schema import (  # noqa: E402
    BigInteger,
    Boolean,
    Column,
    ColumnType,
    Date,
    Integer,
    PrimaryKey,
    Real,
    String,
    Table,
    Text,
    Timestamp,
    Unique,
)
from sqlaspect.exceptions import (  # noqa: E402
    BindingError,
    CompileError,
    DeclarationError,
    ExecutionError,
    MappingError,
    NoResultError,
    QueryError,
    SchemaError,
    SqlAspectError,
    StatementError,
    UnknownColumnError,
)
from sqlaspect.sql.compiler import CompiledQuery, compile_statement  # noqa: E402
from sqlaspect.sql.dialects import (  # noqa: E402
    Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
    list_dialects,
    register_dialect,
)
from sqlaspect.sql.expressions import all_of, any_of, not_  # noqa: E402
from sqlaspect.sql.operations import Delete, Insert, Select, Update, insert, select  # noqa: E402
from sqlaspect.schema.ddl_generator import CreateTable, DropTable  # noqa: E402
from sqlaspect.mapping import Result, db_field, map_all, map_one, map_scalar  # noqa: E402

__all__ = [
    "__version__",
    # Schema
    "Table",
    "Column",
    "PrimaryKey",
    "Unique",
    "ColumnType",
    "Integer",
    "BigInteger",
    "Real",
    "Boolean",
    "String",
    "Text",
    "Date",
    "Timestamp",
    # Statements
    "select",
    "insert",
    "Select",
    "Insert",
    "Update",
    "Delete",
    "CreateTable",
    "DropTable",
    "all_of",
    "any_of",
    "not_",
    # Compilation
    "CompiledQuery",
    "compile_statement",
    "Dialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "MySQLDialect",
    "get_dialect",
    "list_dialects",
    "register_dialect",
    # Mapping
    "Result",
    "db_field",
    "map_scalar",
    "map_one",
    "map_all",
    # Errors
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
