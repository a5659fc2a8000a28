"""Fluent, immutable query builder bound to a query executor."""
from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

from application.execution.projectors import compile_projector
from application.execution.query_executor import QueryExecutor
from domain.query_model import Ordering, Predicate, Property, QueryModel, ResultOperator

T = TypeVar("T")


class Queryable(Generic[T]):
    """Each call returns a new queryable; terminal calls execute the query.

    Successive ``order_by*`` calls add secondary sort keys. ``skip`` and
    ``take`` compose like their sequence counterparts: skips add up, takes
    keep the smaller bound and a skip after a take shrinks the take.
    """

    def __init__(self, executor: QueryExecutor[Any], query_model: QueryModel | None = None) -> None:
        self._executor = executor
        self._query_model = query_model or QueryModel()

    @property
    def query_model(self) -> QueryModel:
        return self._query_model

    def _derive(self, **changes: Any) -> Queryable[Any]:
        return Queryable(self._executor, self._query_model.with_changes(**changes))

    def where(self, *predicates: Predicate, **equals: Any) -> Queryable[T]:
        added = predicates + tuple(Property(name) == value for name, value in equals.items())
        return self._derive(where=self._query_model.where + added)

    def order_by(self, property_name: str) -> Queryable[T]:
        return self._derive(order_by=self._query_model.order_by + (Ordering(property_name),))

    def order_by_descending(self, property_name: str) -> Queryable[T]:
        return self._derive(order_by=self._query_model.order_by + (Ordering(property_name, descending=True),))

    def order_by_score(self) -> Queryable[T]:
        return self._derive(order_by=self._query_model.order_by + (Ordering.by_score(),))

    def skip(self, count: int) -> Queryable[T]:
        if count < 0:
            raise ValueError(f"skip count must be non-negative, got {count}")
        take = self._query_model.take
        if take is not None:
            take = max(0, take - count)
        return self._derive(skip=(self._query_model.skip or 0) + count, take=take)

    def take(self, count: int) -> Queryable[T]:
        if count < 0:
            raise ValueError(f"take count must be non-negative, got {count}")
        take = self._query_model.take
        return self._derive(take=count if take is None else min(take, count))

    def select(self, selector: Callable[[T], Any] | str | tuple[str, ...] | list[str]) -> Queryable[Any]:
        current = self._query_model.selector
        if current is None:
            return self._derive(selector=selector)
        inner = compile_projector(current)
        outer = compile_projector(selector)
        return self._derive(selector=lambda item: outer(inner(item)))

    def count(self) -> int:
        return self._executor.execute_scalar(self._query_model.with_changes(result_operator=ResultOperator.COUNT))

    def long_count(self) -> Any:
        return self._executor.execute_scalar(
            self._query_model.with_changes(result_operator=ResultOperator.LONG_COUNT)
        )

    def single(self) -> T:
        return self._executor.execute_single(self._query_model, return_default_when_empty=False)

    def single_or_default(self, default: Any = None) -> T | Any:
        return self._executor.execute_single(self._query_model, return_default_when_empty=True, default=default)

    def first(self) -> T:
        return self.take(1).single()

    def first_or_default(self, default: Any = None) -> T | Any:
        return self.take(1).single_or_default(default)

    def to_list(self) -> list[T]:
        return list(self)

    def __iter__(self) -> Iterator[T]:
        return self._executor.execute_collection(self._query_model)

    def __repr__(self) -> str:
        return f"Queryable({self._query_model!r})"


__all__ = ["Queryable"]
