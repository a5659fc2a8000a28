"""Domain entities shared by the query core and the index engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from domain.interfaces import SearchQuery
    from domain.query_model import ResultOperator


DEFAULT_MAX_RESULTS = 2**31 - 1


def _identity(value: Any) -> Any:
    return value


@dataclass(slots=True)
class IndexDocument:
    """One stored, searchable record of the index."""

    fields: dict[str, Any] = field(default_factory=dict)
    analyzed: frozenset[str] = frozenset()

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True, slots=True)
class ScoreDoc:
    """A hit: document number within a snapshot and its relevance score."""

    doc: int
    score: float


@dataclass(slots=True)
class TopDocs:
    """Raw hit set returned by a search call."""

    total_hits: int
    score_docs: list[ScoreDoc] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.score_docs)


class SortType(str, Enum):
    """How a field's stored values are compared when sorting."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    SCORE = "score"
    DOC = "doc"


@dataclass(frozen=True, slots=True)
class SortField:
    field: str | None
    type: SortType = SortType.STRING
    reverse: bool = False

    def __str__(self) -> str:
        name = self.field if self.field is not None else f"<{self.type.value}>"
        direction = "desc" if self.reverse else "asc"
        return f"{name}:{self.type.value} {direction}"


@dataclass(frozen=True, slots=True)
class Sort:
    """Engine-native sort specification; fields are compared in order."""

    fields: tuple[SortField, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.fields)

    def __str__(self) -> str:
        return ", ".join(str(sort_field) for sort_field in self.fields) or "<relevance>"


@dataclass(frozen=True, slots=True)
class FieldMappingInfo:
    """Index-field metadata for one domain property."""

    property_name: str
    field_name: str
    sort_type: SortType = SortType.STRING
    analyzed: bool = False
    to_field: Callable[[Any], Any] = _identity
    from_field: Callable[[Any], Any] = _identity

    def field_value(self, value: Any) -> Any:
        """Convert a domain value into the representation stored in the index."""
        if value is None:
            return None
        return self.to_field(value)


@dataclass(frozen=True, slots=True)
class QueryPlan:
    """Translator output that drives one engine search call."""

    query: SearchQuery
    sort: Sort | None = None
    max_results: int = DEFAULT_MAX_RESULTS
    skip: int = 0
    result_operator: ResultOperator | None = None

    def __post_init__(self) -> None:
        if self.skip < 0:
            raise ValueError(f"skip must be non-negative, got {self.skip}")
        if self.max_results < 0:
            raise ValueError(f"max_results must be non-negative, got {self.max_results}")


__all__ = [
    "DEFAULT_MAX_RESULTS",
    "IndexDocument",
    "ScoreDoc",
    "TopDocs",
    "SortType",
    "SortField",
    "Sort",
    "FieldMappingInfo",
    "QueryPlan",
]
