"""Tokenization shared by indexing-time matching and query translation."""
from __future__ import annotations

import re
from typing import Any

from domain.entities import IndexDocument

_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


def tokenize(text: Any) -> list[str]:
    if text is None:
        return []
    return [token.lower() for token in _TOKEN_PATTERN.findall(str(text))]


def field_values(document: IndexDocument, field: str) -> list[Any]:
    """Return the non-null values stored under ``field`` (multi-valued aware)."""
    value = document.get(field)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return [value]


def field_tokens(document: IndexDocument, field: str) -> list[str]:
    """Return the indexed terms of a field: analyzed tokens or whole keyword values."""
    values = field_values(document, field)
    if field in document.analyzed:
        return [token for value in values for token in tokenize(value)]
    return [str(value) for value in values]


__all__ = ["tokenize", "field_values", "field_tokens"]
