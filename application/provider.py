"""Entry point that hands out queryables over one index directory."""
from __future__ import annotations

import logging
from typing import Any, Iterable, TypeVar

from application.execution.query_executor import QueryExecutor
from application.queryable import Queryable
from domain.interfaces import DocumentMapper, IndexDirectory
from infrastructure.mapping.dataclass_mapper import DataclassDocumentMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IndexDataProvider:
    """Binds domain types to mappers and builds executors on demand."""

    def __init__(self, directory: IndexDirectory) -> None:
        self._directory = directory
        self._mappers: dict[type, DocumentMapper[Any]] = {}

    @property
    def directory(self) -> IndexDirectory:
        return self._directory

    def register_mapper(self, cls: type[T], mapper: DocumentMapper[T]) -> None:
        self._mappers[cls] = mapper

    def mapper_for(self, cls: type[T]) -> DocumentMapper[T]:
        mapper = self._mappers.get(cls)
        if mapper is None:
            mapper = DataclassDocumentMapper(cls)
            self._mappers[cls] = mapper
        return mapper

    def as_queryable(self, cls: type[T], mapper: DocumentMapper[T] | None = None) -> Queryable[T]:
        executor = QueryExecutor(self._directory, mapper or self.mapper_for(cls))
        return Queryable(executor)

    def add(self, items: Iterable[T], mapper: DocumentMapper[T] | None = None) -> int:
        items = list(items)
        if not items:
            return 0
        resolved = mapper or self.mapper_for(type(items[0]))
        added = self._directory.add_documents(resolved.to_document(item) for item in items)
        logger.debug("Indexed %d %s items", added, type(items[0]).__name__)
        return added

    def delete_all(self) -> None:
        self._directory.delete_all()


__all__ = ["IndexDataProvider"]
