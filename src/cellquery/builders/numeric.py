"""Numeric columns: number, integer, decimal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import format_number, parse_number
from ..operators import CellSlot, FilterOperator, SlotOperator, TypeFamily
from ..predicates import slot
from .base import BuildContext, LeafBuilder, with_generic_fallback

if TYPE_CHECKING:
    from ..predicates import Predicate

_COMPARISONS: dict[FilterOperator, SlotOperator] = {
    FilterOperator.EQUALS: SlotOperator.EQ,
    FilterOperator.NOT_EQUALS: SlotOperator.NE,
    FilterOperator.GREATER_THAN: SlotOperator.GT,
    FilterOperator.GREATER_THAN_OR_EQUAL: SlotOperator.GE,
    FilterOperator.LESS_THAN: SlotOperator.LT,
    FilterOperator.LESS_THAN_OR_EQUAL: SlotOperator.LE,
}


class NumericBuilder(LeafBuilder):
    """
    Compare the number slot, falling back to the generic slot.

    Legacy generic values are text, so the fallback compares the number's
    text form (``5`` -> ``"5"``).  Ordering on that text is lexicographic.
    """

    @property
    def name(self) -> str:
        return TypeFamily.NUMERIC.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        op = _COMPARISONS.get(operator)
        if op is None:
            raise self.unsupported(operator)
        number = parse_number(value)
        return with_generic_fallback(
            CellSlot.NUMBER,
            slot(CellSlot.NUMBER, op, number),
            slot(CellSlot.GENERIC, op, format_number(number)),
        )
