"""SQLite-хранилище документов индекса."""
from __future__ import annotations

import json
import logging
import sqlite3
import threading
from contextlib import closing
from pathlib import Path
from typing import Iterable

from domain.entities import IndexDocument
from domain.interfaces import IndexDirectory, IndexSearcher
from infrastructure.index.searcher import SnapshotIndexSearcher

logger = logging.getLogger(__name__)


class SqliteDirectory(IndexDirectory):
    """Хранит сохранённые поля документов в лёгкой SQLite-базе."""

    def __init__(self, db_path: str | Path = "index.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()
        self._ensure_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self, *, read_only: bool = False) -> sqlite3.Connection:
        if read_only:
            return sqlite3.connect(f"{self._db_path.resolve().as_uri()}?mode=ro", uri=True)
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    version INTEGER NOT NULL
                )
                """
            )
            conn.execute(
                """
                INSERT OR IGNORE INTO schema_version (id, version) VALUES (1, 1)
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    doc_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    fields TEXT NOT NULL,
                    analyzed TEXT NOT NULL
                )
                """
            )

    def open_searcher(self) -> IndexSearcher:
        with closing(self._connect(read_only=True)) as conn:
            rows = conn.execute("SELECT fields, analyzed FROM documents ORDER BY doc_id").fetchall()
        documents = [
            IndexDocument(fields=json.loads(row[0]), analyzed=frozenset(json.loads(row[1])))
            for row in rows
        ]
        return SnapshotIndexSearcher(documents)

    def add_documents(self, documents: Iterable[IndexDocument]) -> int:
        rows = [
            (json.dumps(document.fields), json.dumps(sorted(document.analyzed)))
            for document in documents
        ]
        if not rows:
            return 0
        with self._write_lock, closing(self._connect()) as conn, conn:
            conn.executemany("INSERT INTO documents (fields, analyzed) VALUES (?, ?)", rows)
        logger.info("Added %d documents to %s", len(rows), self._db_path)
        return len(rows)

    def delete_all(self) -> None:
        with self._write_lock, closing(self._connect()) as conn, conn:
            conn.execute("DELETE FROM documents")


__all__ = ["SqliteDirectory"]
