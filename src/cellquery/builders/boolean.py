"""Boolean columns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import parse_boolean, to_generic_text
from ..operators import CellSlot, FilterOperator, SlotOperator, TypeFamily
from ..predicates import slot
from .base import BuildContext, LeafBuilder, with_generic_fallback

if TYPE_CHECKING:
    from ..predicates import Predicate


class BooleanBuilder(LeafBuilder):
    @property
    def name(self) -> str:
        return TypeFamily.BOOLEAN.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        if operator is FilterOperator.EQUALS:
            op = SlotOperator.EQ
        elif operator is FilterOperator.NOT_EQUALS:
            op = SlotOperator.NE
        else:
            raise self.unsupported(operator)
        flag = parse_boolean(value)
        return with_generic_fallback(
            CellSlot.BOOLEAN,
            slot(CellSlot.BOOLEAN, op, flag),
            slot(CellSlot.GENERIC, op, to_generic_text(flag)),
        )
