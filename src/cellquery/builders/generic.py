"""Fallback builder for json and unhandled column types (generic slot only)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import to_generic_text
from ..operators import CellSlot, FilterOperator, SlotOperator, TypeFamily
from ..predicates import slot
from .base import BuildContext, LeafBuilder

if TYPE_CHECKING:
    from ..predicates import Predicate

_GENERIC_OPERATORS: dict[FilterOperator, SlotOperator] = {
    FilterOperator.EQUALS: SlotOperator.EQ,
    FilterOperator.NOT_EQUALS: SlotOperator.NE,
    FilterOperator.CONTAINS: SlotOperator.CONTAINS,
    FilterOperator.NOT_CONTAINS: SlotOperator.NOT_CONTAINS,
    FilterOperator.STARTS_WITH: SlotOperator.STARTSWITH,
    FilterOperator.ENDS_WITH: SlotOperator.ENDSWITH,
    FilterOperator.REGEX: SlotOperator.CONTAINS,
}


class GenericBuilder(LeafBuilder):
    """
    Match the generic slot directly.

    Scalars are compared as text; lists and objects compare structurally
    under ``equals``/``not_equals``.
    """

    @property
    def name(self) -> str:
        return TypeFamily.GENERIC.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        op = _GENERIC_OPERATORS.get(operator)
        if op is None:
            raise self.unsupported(operator)
        if op in (SlotOperator.EQ, SlotOperator.NE) and isinstance(value, list | dict):
            return slot(CellSlot.GENERIC, op, value)
        return slot(CellSlot.GENERIC, op, to_generic_text(value))
