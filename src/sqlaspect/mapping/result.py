"""Tabular query results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Result:
    """
    Ordered column names and ordered rows, as returned by an executor.

    Example:
        >>> result = Result.from_rows(["id", "name"], [(1, "admin")])
        >>> result.first()
        (1, 'admin')
    """

    columns: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...] = ()

    def __post_init__(self) -> None:
        width = len(self.columns)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"row {index} has {len(row)} values but the result has {width} columns"
                )

    @classmethod
    def from_rows(
        cls, columns: Sequence[str], rows: Iterable[Sequence[Any]] = ()
    ) -> "Result":
        return cls(columns=tuple(columns), rows=tuple(tuple(row) for row in rows))

    @classmethod
    def from_cursor(cls, cursor: Any) -> "Result":
        """Build a result from a SQLAlchemy ``CursorResult``."""
        return cls.from_rows(list(cursor.keys()), cursor.fetchall())

    def first(self) -> Optional[Tuple[Any, ...]]:
        return self.rows[0] if self.rows else None

    def __len__(self) -> int:
        return len(self.rows)
