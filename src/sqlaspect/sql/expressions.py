"""
Predicate trees and orderings.

Predicates are built from column operators (``users.c["id"].equals(1)``) and
combined with ``all_of``/``any_of`` or the ``&``, ``|`` and ``~`` operators.
They are plain immutable values; rendering happens in the compiler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional, Tuple

if TYPE_CHECKING:
    from sqlaspect.schema.core import Column


class Predicate:
    """Base class for boolean-valued expressions."""

    def columns(self) -> Iterator["Column"]:
        """Yield every column referenced by this predicate."""
        raise NotImplementedError

    def __and__(self, other: "Predicate") -> "Compound":
        return all_of(self, other)

    def __or__(self, other: "Predicate") -> "Compound":
        return any_of(self, other)

    def __invert__(self) -> "Not":
        return Not(self)


@dataclass(frozen=True, eq=False)
class BinaryPredicate(Predicate):
    """``column <operator> value``"""

    column: "Column"
    operator: str
    value: Any

    def columns(self) -> Iterator["Column"]:
        yield self.column


@dataclass(frozen=True, eq=False)
class SetPredicate(Predicate):
    """``column [NOT] IN (values...)``"""

    column: "Column"
    values: Tuple[Any, ...]
    negated: bool = False

    def columns(self) -> Iterator["Column"]:
        yield self.column


@dataclass(frozen=True, eq=False)
class RangePredicate(Predicate):
    """``column BETWEEN low AND high``"""

    column: "Column"
    low: Any
    high: Any

    def columns(self) -> Iterator["Column"]:
        yield self.column


@dataclass(frozen=True, eq=False)
class UnaryPredicate(Predicate):
    """``column IS NULL`` / ``column IS NOT NULL``"""

    column: "Column"
    operator: str

    def columns(self) -> Iterator["Column"]:
        yield self.column


@dataclass(frozen=True, eq=False)
class Compound(Predicate):
    """Predicates joined by AND or OR."""

    conjunction: str
    clauses: Tuple[Predicate, ...]

    def columns(self) -> Iterator["Column"]:
        for clause in self.clauses:
            yield from clause.columns()


@dataclass(frozen=True, eq=False)
class Not(Predicate):
    clause: Predicate

    def columns(self) -> Iterator["Column"]:
        yield from self.clause.columns()


def _combine(conjunction: str, clauses: Tuple[Predicate, ...]) -> Compound:
    if not clauses:
        raise ValueError(f"{conjunction} requires at least one predicate")
    flattened = []
    for clause in clauses:
        if not isinstance(clause, Predicate):
            raise TypeError(f"expected a Predicate, got {type(clause).__name__}")
        # Same-conjunction children are lifted so a & b & c renders flat
        if isinstance(clause, Compound) and clause.conjunction == conjunction:
            flattened.extend(clause.clauses)
        else:
            flattened.append(clause)
    return Compound(conjunction, tuple(flattened))


def all_of(*clauses: Predicate) -> Compound:
    """Join predicates with AND."""
    return _combine("AND", clauses)


def any_of(*clauses: Predicate) -> Compound:
    """Join predicates with OR."""
    return _combine("OR", clauses)


def not_(clause: Predicate) -> Not:
    return Not(clause)


@dataclass(frozen=True, eq=False)
class Ordering:
    """A column and its sort direction for ORDER BY."""

    column: "Column"
    descending: bool = False
    nulls_first: Optional[bool] = None


__all__ = [
    "Predicate",
    "BinaryPredicate",
    "SetPredicate",
    "RangePredicate",
    "UnaryPredicate",
    "Compound",
    "Not",
    "Ordering",
    "all_of",
    "any_of",
    "not_",
]
