"""
Temporal columns: date, datetime, time.

Values are naive wall-clock datetimes.  ``equals`` covers the whole day
named by the value, ``[00:00:00.000, 23:59:59.999]``; relative operators
cover ``[start, end)`` windows anchored to the configured clock.  The
generic fallback compares ISO-8601 text, which sorts chronologically.

Time columns hold a time of day anchored to 1970-01-01, so their
``equals``/``not_equals`` compare the exact instant instead of a day.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any

from ..coercion import end_of_day, iso_bound, parse_datetime, start_of_day
from ..dates import relative_window
from ..operators import (
    RELATIVE_DATE_OPERATORS,
    CellSlot,
    ColumnType,
    FilterOperator,
    SlotOperator,
    TypeFamily,
)
from ..predicates import all_of, any_of, slot
from .base import BuildContext, LeafBuilder, with_generic_fallback

if TYPE_CHECKING:
    from ..predicates import Predicate

_S = SlotOperator


def parse_temporal(value: Any, context: BuildContext) -> datetime.datetime:
    return parse_datetime(
        value,
        tz=context.config.timezone,
        allow_time_only=context.column_type is ColumnType.TIME,
    )


def date_range(
    lower: tuple[SlotOperator, datetime.datetime],
    upper: tuple[SlotOperator, datetime.datetime],
    *,
    inside: bool = True,
) -> Predicate:
    """
    Dual-slot range test on the date slot.

    With ``inside=True`` both bounds must hold (AND); otherwise either
    bound suffices (OR), which expresses the complement of a range.
    """
    combine = all_of if inside else any_of
    (low_op, low), (high_op, high) = lower, upper
    return with_generic_fallback(
        CellSlot.DATE,
        combine(slot(CellSlot.DATE, low_op, low), slot(CellSlot.DATE, high_op, high)),
        combine(
            slot(CellSlot.GENERIC, low_op, iso_bound(low)),
            slot(CellSlot.GENERIC, high_op, iso_bound(high)),
        ),
    )


def date_compare(op: SlotOperator, moment: datetime.datetime) -> Predicate:
    return with_generic_fallback(
        CellSlot.DATE,
        slot(CellSlot.DATE, op, moment),
        slot(CellSlot.GENERIC, op, iso_bound(moment)),
    )


class TemporalBuilder(LeafBuilder):
    @property
    def name(self) -> str:
        return TypeFamily.TEMPORAL.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        if operator in RELATIVE_DATE_OPERATORS:
            window = relative_window(operator, context.now, week_start=context.config.week_start)
            return date_range((_S.GE, window.start), (_S.LT, window.end))

        if operator is FilterOperator.BEFORE:
            return date_compare(_S.LT, parse_temporal(value, context))
        if operator is FilterOperator.AFTER:
            return date_compare(_S.GT, parse_temporal(value, context))

        if operator in (FilterOperator.EQUALS, FilterOperator.NOT_EQUALS):
            moment = parse_temporal(value, context)
            equals = operator is FilterOperator.EQUALS
            if context.column_type is ColumnType.TIME:
                return date_compare(_S.EQ if equals else _S.NE, moment)
            start, end = start_of_day(moment), end_of_day(moment)
            if equals:
                return date_range((_S.GE, start), (_S.LE, end))
            return date_range((_S.LT, start), (_S.GT, end), inside=False)

        raise self.unsupported(operator)
