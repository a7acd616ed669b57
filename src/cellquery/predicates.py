"""
Predicate tree produced by the compiler.

Nodes are immutable, structurally comparable data: compiling the same
input twice yields equal trees.  They carry no evaluation logic; the
in-memory evaluator (:mod:`cellquery.evaluator`) and the SQLAlchemy
backend (:mod:`cellquery_sqlalchemy`) walk them.

Serialised form (``to_dict``)::

    {"op": "and", "conditions": [...]}
    {"op": "or", "conditions": [...]}
    {"op": "table", "table_id": 7}
    {"op": "cell", "column_id": 3, "condition": {...}}
    {"op": "icontains", "attr": "string_value", "val": "report"}

Datetime leaf values are written as ISO strings tagged with
``"value_type": "datetime"`` so :func:`predicate_from_dict` can restore
them.
"""

from __future__ import annotations

import datetime
import json
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import PredicateError
from .operators import CellSlot, SlotOperator


@dataclass(frozen=True)
class SlotPredicate:
    """Leaf: compare one slot of a cell with a value."""

    slot: CellSlot
    op: SlotOperator
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"op": self.op.value, "attr": self.slot.value}
        if isinstance(self.value, datetime.datetime):
            data["val"] = self.value.isoformat()
            data["value_type"] = "datetime"
        else:
            data["val"] = self.value
        return data


@dataclass(frozen=True)
class AndPredicate:
    """Logical AND over child predicates."""

    conditions: tuple[Predicate, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"op": "and", "conditions": [c.to_dict() for c in self.conditions]}


@dataclass(frozen=True)
class OrPredicate:
    """Logical OR over child predicates."""

    conditions: tuple[Predicate, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"op": "or", "conditions": [c.to_dict() for c in self.conditions]}


@dataclass(frozen=True)
class CellPredicate:
    """Some cell of the row satisfies *condition*.

    With ``column_id=None`` any cell of the row qualifies (global search).
    """

    column_id: int | None
    condition: Predicate

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "cell",
            "column_id": self.column_id,
            "condition": self.condition.to_dict(),
        }


@dataclass(frozen=True)
class TablePredicate:
    """The row belongs to table *table_id*."""

    table_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"op": "table", "table_id": self.table_id}


Predicate = Union[SlotPredicate, AndPredicate, OrPredicate, CellPredicate, TablePredicate]


def all_of(*conditions: Predicate) -> Predicate:
    """AND the conditions, collapsing a single condition to itself."""
    if not conditions:
        raise PredicateError("Cannot build an empty AND group")
    if len(conditions) == 1:
        return conditions[0]
    return AndPredicate(tuple(conditions))


def any_of(*conditions: Predicate) -> Predicate:
    """OR the conditions, collapsing a single condition to itself."""
    if not conditions:
        raise PredicateError("Cannot build an empty OR group")
    if len(conditions) == 1:
        return conditions[0]
    return OrPredicate(tuple(conditions))


def slot(slot_: CellSlot, op: SlotOperator, value: Any = None) -> SlotPredicate:
    return SlotPredicate(slot_, op, value)


def iter_cell_predicates(predicate: Predicate) -> list[CellPredicate]:
    """Return the column-scoped and search cell nodes of a tree, in order."""
    found: list[CellPredicate] = []
    if isinstance(predicate, CellPredicate):
        found.append(predicate)
    elif isinstance(predicate, AndPredicate | OrPredicate):
        for child in predicate.conditions:
            found.extend(iter_cell_predicates(child))
    return found


# ---------------------------------------------------------------------------
# Deserialisation
# ---------------------------------------------------------------------------


def predicate_from_dict(data: dict[str, Any]) -> Predicate:
    """Rebuild a predicate tree from :meth:`to_dict` output."""
    if not isinstance(data, dict):
        raise PredicateError(f"Expected a dict, got {type(data).__name__}")
    op = data.get("op")
    if not op or not isinstance(op, str):
        raise PredicateError("Missing or empty 'op' key")

    if op in ("and", "or"):
        conditions = data.get("conditions")
        if not isinstance(conditions, list) or not conditions:
            raise PredicateError(f"Logical operator '{op}' requires 'conditions' list")
        children = tuple(predicate_from_dict(c) for c in conditions)
        return AndPredicate(children) if op == "and" else OrPredicate(children)
    try:
        if op == "table":
            return TablePredicate(int(data["table_id"]))
        if op == "cell":
            column_id = data.get("column_id")
            return CellPredicate(
                int(column_id) if column_id is not None else None,
                predicate_from_dict(data["condition"]),
            )
    except (KeyError, TypeError, ValueError) as exc:
        raise PredicateError(f"Malformed '{op}' node: {exc}") from exc
    return _leaf_from_dict(op, data)


def _leaf_from_dict(op: str, data: dict[str, Any]) -> SlotPredicate:
    try:
        slot_op = SlotOperator(op)
    except ValueError as exc:
        raise PredicateError(f"Unknown slot operator: '{op}'") from exc
    try:
        cell_slot = CellSlot(data.get("attr"))
    except ValueError as exc:
        raise PredicateError(f"Unknown cell slot: {data.get('attr')!r}") from exc

    value = data.get("val")
    if data.get("value_type") == "datetime" and isinstance(value, str):
        value = datetime.datetime.fromisoformat(value)
    return SlotPredicate(cell_slot, slot_op, value)


def predicate_to_json(predicate: Predicate) -> str:
    return json.dumps(predicate.to_dict(), sort_keys=True)
