"""Abstract interfaces for the index query system."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Iterator, TypeVar

from domain.entities import FieldMappingInfo, IndexDocument, Sort, TopDocs

T = TypeVar("T")


class SearchQuery(ABC):
    """Engine-native filter query produced by the translator."""

    @abstractmethod
    def matches(self, document: IndexDocument) -> bool:
        """Return whether the document satisfies the query."""

    def scoring_terms(self) -> Iterator[tuple[str, str]]:
        """Yield ``(field, token)`` pairs that contribute to relevance."""
        return iter(())


class IndexSearcher(ABC):
    """Read-only snapshot of an index; close it when done."""

    @abstractmethod
    def search(
        self,
        query: SearchQuery,
        filter: SearchQuery | None,
        n: int,
        sort: Sort | None = None,
    ) -> TopDocs:
        """Return at most ``n`` hits ordered by ``sort`` or by relevance."""

    @abstractmethod
    def doc(self, doc: int) -> IndexDocument:
        """Fetch the stored document for a hit."""

    @abstractmethod
    def max_doc(self) -> int:
        """Return the number of documents in the snapshot."""

    @abstractmethod
    def close(self) -> None:
        """Release the snapshot."""

    def __enter__(self) -> IndexSearcher:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class IndexDirectory(ABC):
    """Source of index snapshots that also accepts new documents."""

    @abstractmethod
    def open_searcher(self) -> IndexSearcher:
        """Open a read-only snapshot owned by the caller."""

    @abstractmethod
    def add_documents(self, documents: Iterable[IndexDocument]) -> int:
        """Append documents and return how many were stored."""

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every document."""


class FieldMappingInfoProvider(ABC):
    """Resolves domain property names to index-field metadata."""

    @abstractmethod
    def get_mapping_info(self, property_name: str) -> FieldMappingInfo:
        """Return mapping info or raise ``FieldMappingNotFoundError``."""


class DocumentMapper(FieldMappingInfoProvider, Generic[T]):
    """Converts between index documents and one domain type."""

    @abstractmethod
    def map_document(self, document: IndexDocument) -> T:
        """Build a fresh domain object from a document's stored fields."""

    @abstractmethod
    def to_document(self, item: T) -> IndexDocument:
        """Build the index document stored for a domain object."""


__all__ = [
    "SearchQuery",
    "IndexSearcher",
    "IndexDirectory",
    "FieldMappingInfoProvider",
    "DocumentMapper",
]
