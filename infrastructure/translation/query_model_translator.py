"""Translates a normalized query model into an engine query plan."""
from __future__ import annotations

from typing import Any

from domain.entities import DEFAULT_MAX_RESULTS, FieldMappingInfo, QueryPlan, Sort, SortField, SortType
from domain.interfaces import FieldMappingInfoProvider, SearchQuery
from domain.query_model import (
    Comparison,
    Conjunction,
    Disjunction,
    Negation,
    Ordering,
    Predicate,
    QueryModel,
)
from infrastructure.index.analysis import tokenize
from infrastructure.index.queries import (
    BooleanQuery,
    MatchAllDocsQuery,
    PrefixQuery,
    RangeQuery,
    TermQuery,
)

_RANGE_BOUNDS = {
    "lt": ("upper", False),
    "le": ("upper", True),
    "gt": ("lower", False),
    "ge": ("lower", True),
}


class QueryModelTranslator:
    """Builds filter queries and sorts, resolving properties through ``provider``."""

    def __init__(self, provider: FieldMappingInfoProvider) -> None:
        self._provider = provider

    def build(self, query_model: QueryModel) -> QueryPlan:
        return QueryPlan(
            query=self.translate_where(query_model.where),
            sort=self.translate_order_by(query_model.order_by),
            max_results=DEFAULT_MAX_RESULTS if query_model.take is None else query_model.take,
            skip=query_model.skip or 0,
            result_operator=query_model.result_operator,
        )

    def translate_where(self, predicates: tuple[Predicate, ...]) -> SearchQuery:
        if not predicates:
            return MatchAllDocsQuery()
        if len(predicates) == 1:
            return self.translate(predicates[0])
        return self.translate(Conjunction(predicates))

    def translate_order_by(self, orderings: tuple[Ordering, ...]) -> Sort | None:
        if not orderings:
            return None
        fields = []
        for ordering in orderings:
            if ordering.is_score:
                fields.append(SortField(field=None, type=SortType.SCORE, reverse=ordering.descending))
                continue
            info = self._provider.get_mapping_info(ordering.property_name)
            fields.append(SortField(field=info.field_name, type=info.sort_type, reverse=ordering.descending))
        return Sort(fields=tuple(fields))

    def translate(self, predicate: Predicate) -> SearchQuery:
        if isinstance(predicate, Comparison):
            return self._comparison(predicate)
        if isinstance(predicate, Conjunction):
            if not predicate.operands:
                return MatchAllDocsQuery()
            return BooleanQuery.of(must=[self.translate(p) for p in predicate.operands])
        if isinstance(predicate, Disjunction):
            return BooleanQuery.of(should=[self.translate(p) for p in predicate.operands])
        if isinstance(predicate, Negation):
            return BooleanQuery.of(must=[MatchAllDocsQuery()], must_not=[self.translate(predicate.operand)])
        raise TypeError(f"Unsupported predicate {predicate!r}")

    def _comparison(self, comparison: Comparison) -> SearchQuery:
        info = self._provider.get_mapping_info(comparison.property_name)
        operator = comparison.operator
        value = comparison.value
        if operator == "eq":
            return self._equals(info, value)
        if operator == "ne":
            return BooleanQuery.of(must=[MatchAllDocsQuery()], must_not=[self._equals(info, value)])
        if operator in _RANGE_BOUNDS:
            side, inclusive = _RANGE_BOUNDS[operator]
            bound = info.field_value(value)
            if side == "upper":
                return RangeQuery(info.field_name, upper=bound, include_upper=inclusive)
            return RangeQuery(info.field_name, lower=bound, include_lower=inclusive)
        if operator == "startswith":
            return self._prefix(info, str(info.field_value(value)))
        if operator == "in":
            return BooleanQuery.of(should=[self._equals(info, item) for item in value])
        if operator == "match":
            return BooleanQuery.of(should=[TermQuery(info.field_name, token) for token in tokenize(value)])
        raise ValueError(f"Unsupported comparison operator '{operator}'")

    @staticmethod
    def _prefix(info: FieldMappingInfo, prefix: str) -> SearchQuery:
        if not info.analyzed:
            return PrefixQuery(info.field_name, prefix)
        tokens = tokenize(prefix)
        if len(tokens) < 2:
            return PrefixQuery(info.field_name, tokens[0] if tokens else prefix.lower())
        # positions are not indexed: leading words must occur, the last one may be partial
        leading = [TermQuery(info.field_name, token) for token in tokens[:-1]]
        return BooleanQuery.of(must=[*leading, PrefixQuery(info.field_name, tokens[-1])])

    @staticmethod
    def _equals(info: FieldMappingInfo, value: Any) -> SearchQuery:
        if value is None:
            return TermQuery(info.field_name, None)
        if info.analyzed:
            tokens = tokenize(info.field_value(value))
            if len(tokens) == 1:
                return TermQuery(info.field_name, tokens[0])
            return BooleanQuery.of(must=[TermQuery(info.field_name, token) for token in tokens])
        return TermQuery(info.field_name, info.field_value(value))


__all__ = ["QueryModelTranslator"]
