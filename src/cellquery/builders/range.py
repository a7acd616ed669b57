"""``between`` / ``not_between`` for numeric and temporal columns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import end_of_day, format_number, is_date_only, parse_number
from ..exceptions import FilterValidationError
from ..operators import CellSlot, ColumnType, FilterOperator, SlotOperator, TypeFamily
from ..predicates import all_of, any_of, slot
from .base import RANGE_KEY, BuildContext, LeafBuilder, with_generic_fallback
from .temporal import date_range, parse_temporal

if TYPE_CHECKING:
    from ..predicates import Predicate

_S = SlotOperator


class RangeBuilder(LeafBuilder):
    """
    Inclusive ranges and their complements.

    ``between a b`` is ``a <= x <= b``; ``not_between a b`` is
    ``x < a OR x > b``, so the two partition every non-null value.  A
    date-only upper bound on a date/datetime column extends to the end of
    that day.
    """

    @property
    def name(self) -> str:
        return RANGE_KEY

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        if operator not in (FilterOperator.BETWEEN, FilterOperator.NOT_BETWEEN):
            raise self.unsupported(operator)
        if second_value is None or second_value == "":
            raise FilterValidationError(
                f"Range operator '{operator.value}' requires secondValue", path="secondValue"
            )
        inside = operator is FilterOperator.BETWEEN

        if context.family is TypeFamily.NUMERIC:
            return self._numeric(value, second_value, inside)
        if context.family is TypeFamily.TEMPORAL:
            low = parse_temporal(value, context)
            high = parse_temporal(second_value, context)
            if context.column_type is not ColumnType.TIME and is_date_only(second_value):
                high = end_of_day(high)
            if inside:
                return date_range((_S.GE, low), (_S.LE, high))
            return date_range((_S.LT, low), (_S.GT, high), inside=False)
        raise self.unsupported(operator)

    def _numeric(self, value: Any, second_value: Any, inside: bool) -> Predicate:
        low, high = parse_number(value), parse_number(second_value)
        combine = all_of if inside else any_of
        low_op, high_op = (_S.GE, _S.LE) if inside else (_S.LT, _S.GT)
        return with_generic_fallback(
            CellSlot.NUMBER,
            combine(slot(CellSlot.NUMBER, low_op, low), slot(CellSlot.NUMBER, high_op, high)),
            combine(
                slot(CellSlot.GENERIC, low_op, format_number(low)),
                slot(CellSlot.GENERIC, high_op, format_number(high)),
            ),
        )
