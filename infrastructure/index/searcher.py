"""Read-only searcher over an immutable snapshot of documents."""
from __future__ import annotations

import copy
import logging
from functools import cmp_to_key
from typing import Any, Callable, Sequence

import numpy as np

from domain.entities import IndexDocument, ScoreDoc, Sort, SortField, SortType, TopDocs
from domain.exceptions import IndexClosedError
from domain.interfaces import IndexSearcher, SearchQuery
from infrastructure.index.analysis import field_values
from infrastructure.index.bm25_scorer import Bm25FieldScorer

logger = logging.getLogger(__name__)


class SnapshotIndexSearcher(IndexSearcher):
    """Evaluates queries against the documents captured when it was opened."""

    def __init__(self, documents: Sequence[IndexDocument]) -> None:
        self._documents = tuple(documents)
        self._scorer = Bm25FieldScorer(self._documents)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def search(
        self,
        query: SearchQuery,
        filter: SearchQuery | None,
        n: int,
        sort: Sort | None = None,
    ) -> TopDocs:
        self._ensure_open()
        matched = [
            doc
            for doc, document in enumerate(self._documents)
            if query.matches(document) and (filter is None or filter.matches(document))
        ]
        if not matched or n <= 0:
            return TopDocs(total_hits=len(matched))

        scores = self._scorer.scores(query.scoring_terms())
        if sort:
            hits = [ScoreDoc(doc=doc, score=float(scores[doc])) for doc in matched]
            hits.sort(key=cmp_to_key(self._comparator(sort)))
        else:
            doc_ids = np.asarray(matched)
            doc_scores = scores[doc_ids]
            order = np.lexsort((doc_ids, -doc_scores))
            hits = [ScoreDoc(doc=int(doc_ids[i]), score=float(doc_scores[i])) for i in order]
        return TopDocs(total_hits=len(matched), score_docs=hits[:n])

    def doc(self, doc: int) -> IndexDocument:
        """Return a private copy of stored document ``doc``; the snapshot stays untouched."""
        self._ensure_open()
        stored = self._documents[doc]
        return IndexDocument(fields=copy.deepcopy(stored.fields), analyzed=stored.analyzed)

    def max_doc(self) -> int:
        self._ensure_open()
        return len(self._documents)

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closing index snapshot with %d documents", len(self._documents))
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise IndexClosedError("Index snapshot is already closed.")

    def _comparator(self, sort: Sort) -> Callable[[ScoreDoc, ScoreDoc], int]:
        def compare(left: ScoreDoc, right: ScoreDoc) -> int:
            for sort_field in sort.fields:
                result = _compare(self._sort_key(sort_field, left), self._sort_key(sort_field, right))
                if result:
                    return -result if sort_field.reverse else result
            return _compare(left.doc, right.doc)

        return compare

    def _sort_key(self, sort_field: SortField, hit: ScoreDoc) -> Any:
        if sort_field.type is SortType.SCORE:
            return -hit.score
        if sort_field.type is SortType.DOC or sort_field.field is None:
            return hit.doc
        values = field_values(self._documents[hit.doc], sort_field.field)
        if not values:
            return None
        value = values[0]
        if sort_field.type is SortType.INT:
            return int(value)
        if sort_field.type is SortType.FLOAT:
            return float(value)
        return str(value)


def _compare(left: Any, right: Any) -> int:
    if left == right:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    return -1 if left < right else 1


__all__ = ["SnapshotIndexSearcher"]
