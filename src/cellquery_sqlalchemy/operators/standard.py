"""Comparison operators (=, !=, >, >=, <, <=) and null checks."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from cellquery.operators import SlotOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class _ComparisonOperator(SQLAlchemyOperator):
    slot_operator: SlotOperator
    compare: Callable[[Any, Any], Any]

    @property
    def name(self) -> SlotOperator:
        return self.slot_operator

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", type(self).compare(column, value))


class EqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.EQ
    compare = op_module.eq


class NotEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.NE
    compare = op_module.ne


class GreaterThanOperator(_ComparisonOperator):
    slot_operator = SlotOperator.GT
    compare = op_module.gt


class GreaterEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.GE
    compare = op_module.ge


class LessThanOperator(_ComparisonOperator):
    slot_operator = SlotOperator.LT
    compare = op_module.lt


class LessEqualOperator(_ComparisonOperator):
    slot_operator = SlotOperator.LE
    compare = op_module.le


class _NullCheckOperator(SQLAlchemyOperator):
    slot_operator: SlotOperator
    negated: bool

    @property
    def name(self) -> SlotOperator:
        return self.slot_operator

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        check = column.is_not(None) if self.negated else column.is_(None)
        return cast("ColumnElement[bool]", check)


class IsNullOperator(_NullCheckOperator):
    slot_operator = SlotOperator.IS_NULL
    negated = False


class IsNotNullOperator(_NullCheckOperator):
    slot_operator = SlotOperator.IS_NOT_NULL
    negated = True
