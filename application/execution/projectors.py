"""Projector builders for the collection and scalar execution paths."""
from __future__ import annotations

from operator import attrgetter
from typing import Any, Callable

import numpy as np

from domain.entities import TopDocs
from domain.exceptions import UnsupportedResultOperatorError
from domain.query_model import ResultOperator

Projector = Callable[[Any], Any]
ScalarProjector = Callable[[TopDocs], Any]


def compile_projector(selector: Any) -> Projector:
    """Turn a projection description into a function of one mapped object.

    ``None`` is the identity, a callable is used as is, an attribute path
    (``"author.name"``) becomes a getter and a sequence of attribute paths
    yields a ``dict`` keyed by path.
    """
    if selector is None:
        return _identity
    if callable(selector):
        return selector
    if isinstance(selector, str):
        return attrgetter(selector)
    if isinstance(selector, (tuple, list)) and all(isinstance(name, str) for name in selector):
        getters = tuple((name, attrgetter(name)) for name in selector)

        def project(item: Any) -> dict[str, Any]:
            return {name: getter(item) for name, getter in getters}

        return project
    raise TypeError(f"Unsupported projection {selector!r}")


def build_scalar_projector(result_operator: ResultOperator | None) -> ScalarProjector:
    """Return a function computing the requested aggregate from a hit set.

    Only count and long-count are supported; long-count widens to ``numpy.int64``.
    """
    if result_operator is ResultOperator.COUNT:
        return count_hits
    if result_operator is ResultOperator.LONG_COUNT:
        return _long_count
    raise UnsupportedResultOperatorError(result_operator)


def count_hits(hits: TopDocs) -> int:
    return len(hits)


def _long_count(hits: TopDocs) -> np.int64:
    return np.int64(count_hits(hits))


def _identity(item: Any) -> Any:
    return item


__all__ = ["Projector", "ScalarProjector", "compile_projector", "build_scalar_projector", "count_hits"]
