"""Normalized, declarative description of one query.

A :class:`QueryModel` is produced once per query invocation by the fluent
:class:`application.queryable.Queryable` surface (or built by hand) and is
read-only to the execution core. Predicates and orderings refer to domain
property names; the translator resolves them to index fields.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


COMPARISON_OPERATORS = frozenset({"eq", "ne", "lt", "le", "gt", "ge", "startswith", "in", "match"})


class Predicate:
    """Base for filter predicates; combine with ``&``, ``|`` and ``~``."""

    __slots__ = ()

    def __and__(self, other: Predicate) -> Predicate:
        return Conjunction((self, other))

    def __or__(self, other: Predicate) -> Predicate:
        return Disjunction((self, other))

    def __invert__(self) -> Predicate:
        return Negation(self)


@dataclass(frozen=True, slots=True)
class Comparison(Predicate):
    property_name: str
    operator: str
    value: Any

    def __post_init__(self) -> None:
        if self.operator not in COMPARISON_OPERATORS:
            raise ValueError(f"Unknown comparison operator '{self.operator}'")


@dataclass(frozen=True, slots=True)
class Conjunction(Predicate):
    operands: tuple[Predicate, ...]


@dataclass(frozen=True, slots=True)
class Disjunction(Predicate):
    operands: tuple[Predicate, ...]


@dataclass(frozen=True, slots=True)
class Negation(Predicate):
    operand: Predicate


class Property:
    """Builds comparisons against a domain property: ``Property("year") >= 2000``."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __eq__(self, value: Any) -> Comparison:  # type: ignore[override]
        return Comparison(self.name, "eq", value)

    def __ne__(self, value: Any) -> Comparison:  # type: ignore[override]
        return Comparison(self.name, "ne", value)

    def __lt__(self, value: Any) -> Comparison:
        return Comparison(self.name, "lt", value)

    def __le__(self, value: Any) -> Comparison:
        return Comparison(self.name, "le", value)

    def __gt__(self, value: Any) -> Comparison:
        return Comparison(self.name, "gt", value)

    def __ge__(self, value: Any) -> Comparison:
        return Comparison(self.name, "ge", value)

    __hash__ = None  # type: ignore[assignment]

    def startswith(self, prefix: str) -> Comparison:
        return Comparison(self.name, "startswith", prefix)

    def is_in(self, values: Any) -> Comparison:
        return Comparison(self.name, "in", tuple(values))

    def matches(self, text: str) -> Comparison:
        """Full-text match: any analyzed token of ``text`` occurs in the field."""
        return Comparison(self.name, "match", text)

    def __repr__(self) -> str:
        return f"Property({self.name!r})"


@dataclass(frozen=True, slots=True)
class Ordering:
    property_name: str | None
    descending: bool = False

    @classmethod
    def by_score(cls) -> Ordering:
        """Order by relevance (best match first)."""
        return cls(property_name=None)

    @property
    def is_score(self) -> bool:
        return self.property_name is None


class ResultOperator(str, Enum):
    """Scalar aggregate requested in place of a result sequence."""

    COUNT = "count"
    LONG_COUNT = "long_count"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    AVERAGE = "average"
    ANY = "any"
    ALL = "all"


@dataclass(frozen=True, slots=True)
class QueryModel:
    where: tuple[Predicate, ...] = ()
    order_by: tuple[Ordering, ...] = ()
    selector: Any = None
    skip: int | None = None
    take: int | None = None
    result_operator: ResultOperator | None = None

    def __post_init__(self) -> None:
        if self.skip is not None and self.skip < 0:
            raise ValueError(f"skip must be non-negative, got {self.skip}")
        if self.take is not None and self.take < 0:
            raise ValueError(f"take must be non-negative, got {self.take}")

    def with_changes(self, **changes: Any) -> QueryModel:
        return replace(self, **changes)


__all__ = [
    "COMPARISON_OPERATORS",
    "Predicate",
    "Comparison",
    "Conjunction",
    "Disjunction",
    "Negation",
    "Property",
    "Ordering",
    "ResultOperator",
    "QueryModel",
]
