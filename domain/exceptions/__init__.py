"""Errors raised while preparing and executing index queries."""
from __future__ import annotations


class QueryExecutionError(Exception):
    """Base class for query execution failures."""


class UnsupportedResultOperatorError(QueryExecutionError, NotImplementedError):
    """Raised when a scalar aggregate other than count/long-count is requested."""

    def __init__(self, operator: object) -> None:
        self.operator = operator
        kind = getattr(operator, "name", None) or type(operator).__name__
        super().__init__(f"The result operator type {kind} is not supported.")


class FieldMappingNotFoundError(QueryExecutionError, KeyError):
    """Raised when a domain property has no index field mapping."""

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        super().__init__(f"No field mapping found for property '{property_name}'.")

    def __str__(self) -> str:
        return str(self.args[0])


class CardinalityError(QueryExecutionError, ValueError):
    """Raised when a single-item query yields zero or several results."""


class IndexClosedError(QueryExecutionError, RuntimeError):
    """Raised when a searcher snapshot is used after it was closed."""


__all__ = [
    "QueryExecutionError",
    "UnsupportedResultOperatorError",
    "FieldMappingNotFoundError",
    "CardinalityError",
    "IndexClosedError",
]
