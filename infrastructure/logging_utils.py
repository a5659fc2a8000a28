"""Утилиты для настройки логирования индекса."""
from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> bool:
    """Настроить корневой логгер: консоль и, если задан ``log_file``, файл.

    Повторный вызов ничего не меняет, если у корневого логгера уже есть
    обработчики. Возвращает ``True``, когда обработчики были добавлены.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return False

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return True


__all__ = ["LOG_FORMAT", "setup_logging"]
