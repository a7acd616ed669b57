"""
In-memory predicate evaluation.

Evaluates a compiled predicate tree against rows already loaded into
memory: post-filtering cached pages, previewing a filter in the UI, and
checking compiler output in tests.  Slot semantics match the SQL
backend: generic scalars compare as text, lists and objects compare
structurally, and any comparison with a null slot is false.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .coercion import to_generic_text
from .exceptions import PredicateError
from .operators import CellSlot
from .operators_memory import build_default_registry
from .predicates import (
    AndPredicate,
    CellPredicate,
    OrPredicate,
    SlotPredicate,
    TablePredicate,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .operators_memory import MemoryOperatorRegistry
    from .predicates import Predicate


@dataclass
class CellRecord:
    column_id: int
    string_value: str | None = None
    number_value: float | None = None
    date_value: datetime.datetime | None = None
    boolean_value: bool | None = None
    value: Any = None

    def slot_value(self, slot: CellSlot) -> Any:
        return getattr(self, slot.value)


@dataclass
class RowRecord:
    id: int
    table_id: int
    cells: list[CellRecord] = field(default_factory=list)


class PredicateEvaluator:
    """
    Evaluate predicate trees against :class:`RowRecord` objects.

    Usage::

        evaluator = PredicateEvaluator()
        matching = evaluator.filter(compiled.predicate, rows)
    """

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self.registry = registry or build_default_registry()

    def matches(self, predicate: Predicate, row: RowRecord) -> bool:
        if isinstance(predicate, TablePredicate):
            return row.table_id == predicate.table_id
        if isinstance(predicate, CellPredicate):
            return any(
                self.matches_cell(predicate.condition, cell)
                for cell in row.cells
                if predicate.column_id is None or cell.column_id == predicate.column_id
            )
        if isinstance(predicate, AndPredicate):
            return all(self.matches(c, row) for c in predicate.conditions)
        if isinstance(predicate, OrPredicate):
            return any(self.matches(c, row) for c in predicate.conditions)
        raise PredicateError(f"{type(predicate).__name__} cannot be evaluated against a row")

    def matches_cell(self, predicate: Predicate, cell: CellRecord) -> bool:
        if isinstance(predicate, SlotPredicate):
            return self._evaluate_slot(predicate, cell)
        if isinstance(predicate, AndPredicate):
            return all(self.matches_cell(c, cell) for c in predicate.conditions)
        if isinstance(predicate, OrPredicate):
            return any(self.matches_cell(c, cell) for c in predicate.conditions)
        raise PredicateError(f"{type(predicate).__name__} cannot be evaluated against a cell")

    def filter(self, predicate: Predicate, rows: Iterable[RowRecord]) -> list[RowRecord]:
        return [row for row in rows if self.matches(predicate, row)]

    def _evaluate_slot(self, leaf: SlotPredicate, cell: CellRecord) -> bool:
        actual = cell.slot_value(leaf.slot)
        expected = leaf.value
        if leaf.slot is CellSlot.GENERIC:
            if actual is not None and not isinstance(expected, list | dict):
                actual = to_generic_text(actual)
        elif leaf.slot is CellSlot.DATE:
            actual = _as_datetime(actual)
        try:
            return self.registry.evaluate(leaf.op, actual, expected)
        except ValueError as exc:
            raise PredicateError(str(exc)) from exc


def _as_datetime(value: Any) -> Any:
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(value, datetime.time.min)
    return value
