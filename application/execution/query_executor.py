"""Executes query models against an index directory.

The executor owns one query execution at a time: it normalizes and
translates the model, opens a read-only snapshot, runs the engine search with
the pagination bounds of the plan and projects the hits, either into a scalar
aggregate or into a lazy sequence of mapped domain objects.
"""
from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, Generator, Generic, TypeVar

from application.execution.projectors import Projector, build_scalar_projector, compile_projector
from domain.entities import FieldMappingInfo, QueryPlan
from domain.exceptions import CardinalityError
from domain.interfaces import DocumentMapper, FieldMappingInfoProvider, IndexDirectory, IndexSearcher
from domain.query_model import QueryModel
from infrastructure.translation.query_model_transformer import transform_query_model
from infrastructure.translation.query_model_translator import QueryModelTranslator

logger = logging.getLogger(__name__)

TDocument = TypeVar("TDocument")

_MISSING = object()


class QueryExecutor(FieldMappingInfoProvider, Generic[TDocument]):
    def __init__(self, directory: IndexDirectory, mapper: DocumentMapper[TDocument]) -> None:
        self._directory = directory
        self._mapper = mapper

    def get_mapping_info(self, property_name: str) -> FieldMappingInfo:
        return self._mapper.get_mapping_info(property_name)

    def prepare(self, query_model: QueryModel) -> tuple[QueryModel, QueryPlan]:
        """Normalize and translate ``query_model``; a new plan is built on every call."""
        transformed = transform_query_model(query_model)
        plan = QueryModelTranslator(self).build(transformed)
        logger.debug("Index query: %s sort: %s", plan.query, plan.sort)
        return transformed, plan

    def execute_scalar(self, query_model: QueryModel) -> Any:
        _, plan = self.prepare(query_model)
        projector = build_scalar_projector(plan.result_operator)

        with self._directory.open_searcher() as searcher:
            # skip only narrows the bound here; it does not offset the counted hits
            max_results = _effective_max_results(plan, searcher)
            hits = searcher.search(plan.query, None, max_results, plan.sort)
            return projector(hits)

    def execute_single(
        self,
        query_model: QueryModel,
        return_default_when_empty: bool = False,
        default: Any = None,
    ) -> Any:
        with closing(self.execute_collection(query_model)) as sequence:
            first = next(sequence, _MISSING)
            if first is _MISSING:
                if return_default_when_empty:
                    return default
                raise CardinalityError("Sequence contains no elements")
            if next(sequence, _MISSING) is not _MISSING:
                raise CardinalityError("Sequence contains more than one element")
            return first

    def execute_collection(self, query_model: QueryModel) -> Generator[Any, None, None]:
        """Return a lazy, single-pass sequence of projected results.

        The snapshot is opened when the first element is requested and closed
        once the sequence is exhausted, fails or is closed by the caller.
        """
        transformed, plan = self.prepare(query_model)
        projector = compile_projector(transformed.selector)
        return self._iterate(plan, projector)

    def _iterate(self, plan: QueryPlan, projector: Projector) -> Generator[Any, None, None]:
        with self._directory.open_searcher() as searcher:
            max_results = _effective_max_results(plan, searcher)
            hits = searcher.search(plan.query, None, max_results + plan.skip, plan.sort)

            for score_doc in hits.score_docs[plan.skip:]:
                item = self._mapper.map_document(searcher.doc(score_doc.doc))
                yield projector(item)


def _effective_max_results(plan: QueryPlan, searcher: IndexSearcher) -> int:
    return max(0, min(plan.max_results, searcher.max_doc() - plan.skip))


__all__ = ["QueryExecutor"]
