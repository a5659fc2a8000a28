from infrastructure.index.in_memory_directory import InMemoryDirectory
from infrastructure.index.queries import (
    BooleanClause,
    BooleanQuery,
    MatchAllDocsQuery,
    Occur,
    PrefixQuery,
    RangeQuery,
    TermQuery,
)
from infrastructure.index.searcher import SnapshotIndexSearcher
from infrastructure.index.sqlite_directory import SqliteDirectory

__all__ = [
    "BooleanClause",
    "BooleanQuery",
    "InMemoryDirectory",
    "MatchAllDocsQuery",
    "Occur",
    "PrefixQuery",
    "RangeQuery",
    "SnapshotIndexSearcher",
    "SqliteDirectory",
    "TermQuery",
]
