"""Column type model.

Each column type is a frozen value naming a SQL domain plus the per-column
modifiers ``not_null``, ``unique`` and ``primary_key``:

    >>> Integer(not_null=True)
    Integer(not_null=True, unique=False, primary_key=False)
    >>> String(length=32, unique=True, not_null=True).kind
    <TypeKind.STRING: 'string'>

Dialects translate ``kind`` (plus ``length``/``with_timezone``) into DDL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional


class TypeKind(Enum):
    """Supported SQL value domains."""

    INTEGER = "integer"
    BIGINT = "bigint"
    REAL = "real"
    BOOLEAN = "boolean"
    STRING = "string"
    TEXT = "text"
    DATE = "date"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class ColumnType:
    """Base class for column types."""

    kind: ClassVar[TypeKind]

    not_null: bool = False
    unique: bool = False
    primary_key: bool = False


@dataclass(frozen=True)
class Integer(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.INTEGER


@dataclass(frozen=True)
class BigInteger(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.BIGINT


@dataclass(frozen=True)
class Real(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.REAL


@dataclass(frozen=True)
class Boolean(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.BOOLEAN


@dataclass(frozen=True)
class String(ColumnType):
    """Variable length string; ``length=None`` means unbounded VARCHAR."""

    kind: ClassVar[TypeKind] = TypeKind.STRING

    length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.length is not None and self.length <= 0:
            raise ValueError(f"String length must be positive, got {self.length}")


@dataclass(frozen=True)
class Text(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.TEXT


@dataclass(frozen=True)
class Date(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.DATE


@dataclass(frozen=True)
class Timestamp(ColumnType):
    kind: ClassVar[TypeKind] = TypeKind.TIMESTAMP

    with_timezone: bool = False


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
]
