"""Schema model: column types, tables, constraints and DDL."""

from .core import Column, ColumnCollection, PrimaryKey, Table, Unique
from .types import (
    BigInteger,
    Boolean,
    ColumnType,
    Date,
    Integer,
    Real,
    String,
    Text,
    Timestamp,
    TypeKind,
)

__all__ = [
    "TypeKind",
    "ColumnType",
    "Integer",
    "BigInteger",
    "Real",
    "Boolean",
    "String",
    "Text",
    "Date",
    "Timestamp",
    "Column",
    "ColumnCollection",
    "PrimaryKey",
    "Unique",
    "Table",
]
