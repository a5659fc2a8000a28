"""Dependency wiring for the index query application."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, cast

from application.provider import IndexDataProvider
from domain.interfaces import IndexDirectory
from infrastructure.index.in_memory_directory import InMemoryDirectory
from infrastructure.index.sqlite_directory import SqliteDirectory
from infrastructure.logging_utils import setup_logging


DirectoryName = Literal["memory", "sqlite"]


@dataclass(slots=True)
class Container:
    """Simple container bundling the directory and the provider built on it."""

    directory: IndexDirectory
    provider: IndexDataProvider


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for the index directory and, optionally, application logging.

    Logging is left alone unless ``log_level`` or ``log_file`` is set.
    """

    directory: DirectoryName = "memory"
    data_root: str = "data"
    db_name: str = "index.db"
    log_level: str | None = None
    log_file: str | None = None

    @property
    def db_path(self) -> Path:
        return Path(self.data_root) / self.db_name

    @classmethod
    def from_env(cls) -> ContainerConfig:
        defaults = cls()
        return cls(
            directory=cast(DirectoryName, os.getenv("INDEXQUERY_DIRECTORY", defaults.directory)),
            data_root=os.getenv("INDEXQUERY_DATA_ROOT", defaults.data_root),
            db_name=os.getenv("INDEXQUERY_DB_NAME", defaults.db_name),
            log_level=os.getenv("INDEXQUERY_LOG_LEVEL", defaults.log_level),
            log_file=os.getenv("INDEXQUERY_LOG_FILE", defaults.log_file),
        )


_DIRECTORY_FACTORIES: dict[DirectoryName, Callable[[ContainerConfig], IndexDirectory]] = {
    "memory": lambda cfg: InMemoryDirectory(),
    "sqlite": lambda cfg: SqliteDirectory(cfg.db_path),
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    if cfg.log_level or cfg.log_file:
        setup_logging(cfg.log_level or "INFO", cfg.log_file)
    try:
        factory = _DIRECTORY_FACTORIES[cfg.directory]
    except KeyError as exc:
        raise ValueError(f"Unknown directory '{cfg.directory}'") from exc
    directory = factory(cfg)
    return Container(directory=directory, provider=IndexDataProvider(directory))


__all__ = ["Container", "ContainerConfig", "build_default_container"]
