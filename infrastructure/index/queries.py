"""Engine-native query nodes evaluated against stored documents."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator

from domain.entities import IndexDocument
from domain.interfaces import SearchQuery
from infrastructure.index.analysis import field_tokens, field_values


@dataclass(frozen=True)
class MatchAllDocsQuery(SearchQuery):
    def matches(self, document: IndexDocument) -> bool:
        return True

    def __str__(self) -> str:
        return "*:*"


@dataclass(frozen=True)
class TermQuery(SearchQuery):
    """Exact term match; analyzed fields are matched token by token."""

    field: str
    term: Any

    def matches(self, document: IndexDocument) -> bool:
        if self.term is None:
            return not field_values(document, self.field)
        if self.field in document.analyzed:
            return str(self.term) in field_tokens(document, self.field)
        return any(value == self.term for value in field_values(document, self.field))

    def scoring_terms(self) -> Iterator[tuple[str, str]]:
        if self.term is not None:
            yield self.field, str(self.term)

    def __str__(self) -> str:
        return f"{self.field}:{self.term}"


@dataclass(frozen=True)
class PrefixQuery(SearchQuery):
    field: str
    prefix: str

    def matches(self, document: IndexDocument) -> bool:
        return any(token.startswith(self.prefix) for token in field_tokens(document, self.field))

    def __str__(self) -> str:
        return f"{self.field}:{self.prefix}*"


@dataclass(frozen=True)
class RangeQuery(SearchQuery):
    """Range over stored values; ``None`` leaves that side open."""

    field: str
    lower: Any = None
    upper: Any = None
    include_lower: bool = True
    include_upper: bool = True

    def matches(self, document: IndexDocument) -> bool:
        return any(self._in_range(value) for value in field_values(document, self.field))

    def _in_range(self, value: Any) -> bool:
        try:
            if self.lower is not None:
                if value < self.lower or (value == self.lower and not self.include_lower):
                    return False
            if self.upper is not None:
                if value > self.upper or (value == self.upper and not self.include_upper):
                    return False
        except TypeError:
            return False
        return True

    def __str__(self) -> str:
        left = "[" if self.include_lower else "{"
        right = "]" if self.include_upper else "}"
        lower = "*" if self.lower is None else self.lower
        upper = "*" if self.upper is None else self.upper
        return f"{self.field}:{left}{lower} TO {upper}{right}"


class Occur(str, Enum):
    MUST = "+"
    SHOULD = ""
    MUST_NOT = "-"


@dataclass(frozen=True)
class BooleanClause:
    query: SearchQuery
    occur: Occur = Occur.MUST


@dataclass(frozen=True)
class BooleanQuery(SearchQuery):
    """Combination of clauses.

    A document matches when every MUST clause matches, no MUST_NOT clause
    matches and, when there are no MUST clauses, at least one SHOULD clause
    matches. A query without positive clauses matches nothing.
    """

    clauses: tuple[BooleanClause, ...] = ()

    @classmethod
    def of(
        cls,
        *,
        must: Iterable[SearchQuery] = (),
        should: Iterable[SearchQuery] = (),
        must_not: Iterable[SearchQuery] = (),
    ) -> BooleanQuery:
        clauses = [BooleanClause(query, Occur.MUST) for query in must]
        clauses += [BooleanClause(query, Occur.SHOULD) for query in should]
        clauses += [BooleanClause(query, Occur.MUST_NOT) for query in must_not]
        return cls(clauses=tuple(clauses))

    def matches(self, document: IndexDocument) -> bool:
        must = [clause.query for clause in self.clauses if clause.occur is Occur.MUST]
        should = [clause.query for clause in self.clauses if clause.occur is Occur.SHOULD]
        must_not = [clause.query for clause in self.clauses if clause.occur is Occur.MUST_NOT]
        if not must and not should:
            return False
        if not all(query.matches(document) for query in must):
            return False
        if any(query.matches(document) for query in must_not):
            return False
        if not must:
            return any(query.matches(document) for query in should)
        return True

    def scoring_terms(self) -> Iterator[tuple[str, str]]:
        for clause in self.clauses:
            if clause.occur is not Occur.MUST_NOT:
                yield from clause.query.scoring_terms()

    def __str__(self) -> str:
        parts = []
        for clause in self.clauses:
            text = str(clause.query)
            if isinstance(clause.query, BooleanQuery):
                text = f"({text})"
            parts.append(f"{clause.occur.value}{text}")
        return " ".join(parts)


__all__ = [
    "MatchAllDocsQuery",
    "TermQuery",
    "PrefixQuery",
    "RangeQuery",
    "Occur",
    "BooleanClause",
    "BooleanQuery",
]
