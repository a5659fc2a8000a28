"""Индекс документов в памяти для тестов и демо."""
from __future__ import annotations

import copy
import logging
import threading
from typing import Iterable

from domain.entities import IndexDocument
from domain.interfaces import IndexDirectory, IndexSearcher
from infrastructure.index.searcher import SnapshotIndexSearcher

logger = logging.getLogger(__name__)


class InMemoryDirectory(IndexDirectory):
    """Хранит документы в списке Python; каждый поиск работает со снимком."""

    def __init__(self, documents: Iterable[IndexDocument] | None = None) -> None:
        self._documents: list[IndexDocument] = []
        self._lock = threading.Lock()
        if documents is not None:
            self.add_documents(documents)

    def open_searcher(self) -> IndexSearcher:
        with self._lock:
            snapshot = tuple(self._documents)
        return SnapshotIndexSearcher(snapshot)

    def add_documents(self, documents: Iterable[IndexDocument]) -> int:
        copies = [
            IndexDocument(fields=copy.deepcopy(doc.fields), analyzed=frozenset(doc.analyzed))
            for doc in documents
        ]
        with self._lock:
            self._documents.extend(copies)
            total = len(self._documents)
        logger.info("Added %d documents to in-memory index (total %d)", len(copies), total)
        return len(copies)

    def delete_all(self) -> None:
        with self._lock:
            self._documents.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


__all__ = ["InMemoryDirectory"]
