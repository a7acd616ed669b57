"""Comparison operators (=, !=, >, >=, <, <=) and null checks."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any

from ..operators import SlotOperator
from .base import MemoryOperator

if TYPE_CHECKING:
    from collections.abc import Callable


class _ComparisonOperator(MemoryOperator):
    slot_operator: SlotOperator
    compare: Callable[[Any, Any], Any]

    @property
    def name(self) -> SlotOperator:
        return self.slot_operator

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        try:
            return bool(type(self).compare(field_value, condition_value))
        except TypeError:
            # e.g. a number slot compared with text
            return False


class EqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.EQ
    compare = operator.eq


class NotEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.NE
    compare = operator.ne


class GreaterThanOperator(_ComparisonOperator):
    slot_operator = SlotOperator.GT
    compare = operator.gt


class GreaterEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.GE
    compare = operator.ge


class LessThanOperator(_ComparisonOperator):
    slot_operator = SlotOperator.LT
    compare = operator.lt


class LessEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.LE
    compare = operator.le


class _NullCheckOperator(MemoryOperator):
    slot_operator: SlotOperator
    negated: bool

    @property
    def name(self) -> SlotOperator:
        return self.slot_operator

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return (field_value is None) is not self.negated


class IsNullOperator(_NullCheckOperator):
    slot_operator = SlotOperator.IS_NULL
    negated = False


class IsNotNullOperator(_NullCheckOperator):
    slot_operator = SlotOperator.IS_NOT_NULL
    negated = True
