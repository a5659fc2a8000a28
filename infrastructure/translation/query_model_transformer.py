"""Structural simplification of query models before translation."""
from __future__ import annotations

from domain.query_model import Comparison, Conjunction, Disjunction, Negation, Predicate, QueryModel


def transform_query_model(query_model: QueryModel) -> QueryModel:
    """Flatten nested boolean groups and drop double negations.

    Returns a new model; the input is left untouched.
    """
    return query_model.with_changes(where=tuple(simplify_predicate(p) for p in query_model.where))


def simplify_predicate(predicate: Predicate) -> Predicate:
    if isinstance(predicate, Negation):
        inner = simplify_predicate(predicate.operand)
        if isinstance(inner, Negation):
            return inner.operand
        return Negation(inner)
    if isinstance(predicate, (Conjunction, Disjunction)):
        group = type(predicate)
        operands: list[Predicate] = []
        for operand in predicate.operands:
            operand = simplify_predicate(operand)
            if isinstance(operand, group):
                operands.extend(operand.operands)
            else:
                operands.append(operand)
        if len(operands) == 1:
            return operands[0]
        return group(tuple(operands))
    if isinstance(predicate, Comparison):
        return predicate
    raise TypeError(f"Unsupported predicate {predicate!r}")


__all__ = ["transform_query_model", "simplify_predicate"]
