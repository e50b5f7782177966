"""Store-agnostic predicate tree over job records.

Predicates are plain frozen dataclasses. Adapters either translate them into
their own query language via :func:`to_dict` or evaluate them in memory via
:func:`evaluate`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, Sequence, Union

Op = Literal["eq", "gte", "lte", "contains", "in", "is_null"]
Direction = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    op: Op
    value: Any = None


@dataclass(frozen=True, slots=True)
class AllOf:
    clauses: tuple["Predicate", ...]


@dataclass(frozen=True, slots=True)
class AnyOf:
    clauses: tuple["Predicate", ...]


@dataclass(frozen=True, slots=True)
class Not:
    clause: "Predicate"


Predicate = Union[Field, AllOf, AnyOf, Not]


@dataclass(frozen=True, slots=True)
class OrderTerm:
    """Sort key; null values always sort last regardless of direction."""

    field: str
    direction: Direction = "desc"


def evaluate(predicate: Predicate, record: Any) -> bool:
    """Evaluate ``predicate`` against a record exposing attributes or mapping keys."""
    if isinstance(predicate, AllOf):
        return all(evaluate(clause, record) for clause in predicate.clauses)
    if isinstance(predicate, AnyOf):
        return any(evaluate(clause, record) for clause in predicate.clauses)
    if isinstance(predicate, Not):
        return not evaluate(predicate.clause, record)
    if isinstance(predicate, Field):
        return _evaluate_field(predicate, _read(record, predicate.name))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _evaluate_field(predicate: Field, actual: Any) -> bool:
    op = predicate.op
    if op == "is_null":
        expected = True if predicate.value is None else bool(predicate.value)
        return (actual is None) == expected
    if op == "eq":
        return actual == predicate.value
    if op == "in":
        return actual in predicate.value
    if actual is None:
        return False
    if op == "gte":
        return _comparable(actual) >= _comparable(predicate.value)
    if op == "lte":
        return _comparable(actual) <= _comparable(predicate.value)
    if op == "contains":
        if isinstance(actual, str):
            return str(predicate.value) in actual
        return predicate.value in actual
    raise ValueError(f"Unsupported operator: {op!r}")


def _comparable(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _read(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def to_dict(predicate: Predicate) -> dict[str, Any]:
    """JSON-friendly rendering, used by ``jobslices query --explain``."""
    if isinstance(predicate, AllOf):
        return {"all_of": [to_dict(clause) for clause in predicate.clauses]}
    if isinstance(predicate, AnyOf):
        return {"any_of": [to_dict(clause) for clause in predicate.clauses]}
    if isinstance(predicate, Not):
        return {"not": to_dict(predicate.clause)}
    value = predicate.value
    if isinstance(value, datetime):
        value = value.isoformat()
    elif isinstance(value, (set, frozenset, tuple)):
        value = sorted(value)
    return {"field": predicate.name, "op": predicate.op, "value": value}


def sort_records(records: Sequence[Any], order_by: Sequence[OrderTerm]) -> list[Any]:
    """Stable multi-key sort honoring per-term direction with nulls last."""
    ordered = list(records)
    for term in reversed(order_by):
        present = [item for item in ordered if _read(item, term.field) is not None]
        missing = [item for item in ordered if _read(item, term.field) is None]
        present.sort(key=lambda item: _read(item, term.field), reverse=term.direction == "desc")
        ordered = present + missing
    return ordered


__all__ = [
    "AllOf",
    "AnyOf",
    "Field",
    "Not",
    "OrderTerm",
    "Predicate",
    "evaluate",
    "sort_records",
    "to_dict",
]
