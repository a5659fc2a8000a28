"""BM25 relevance scoring over the fields of one index snapshot."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from rank_bm25 import BM25Okapi

from domain.entities import IndexDocument
from infrastructure.index.analysis import field_tokens


@dataclass(slots=True)
class _FieldState:
    index: BM25Okapi | None


class Bm25FieldScorer:
    """Builds one BM25 index per field on first use and keeps it for the snapshot."""

    def __init__(self, documents: Sequence[IndexDocument]) -> None:
        self._documents = documents
        self._fields: dict[str, _FieldState] = {}

    def scores(self, terms: Iterable[tuple[str, str]]) -> np.ndarray:
        total = np.zeros(len(self._documents), dtype=float)
        grouped: dict[str, list[str]] = {}
        for field, token in terms:
            grouped.setdefault(field, []).append(token)
        for field, tokens in grouped.items():
            state = self._state(field)
            if state.index is None:
                continue
            total += np.asarray(state.index.get_scores(tokens), dtype=float)
        return total

    def _state(self, field: str) -> _FieldState:
        state = self._fields.get(field)
        if state is None:
            corpus = [field_tokens(document, field) for document in self._documents]
            if not corpus or not any(corpus):
                state = _FieldState(index=None)
            else:
                state = _FieldState(index=BM25Okapi(corpus))
            self._fields[field] = state
        return state


__all__ = ["Bm25FieldScorer"]
