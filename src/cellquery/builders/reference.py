"""Generic-slot columns: references and custom enumerations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import as_reference_list
from ..operators import CellSlot, FilterOperator, SlotOperator, TypeFamily
from ..predicates import slot
from .base import BuildContext, LeafBuilder

if TYPE_CHECKING:
    from ..predicates import Predicate


def _equality(operator: FilterOperator) -> SlotOperator | None:
    if operator is FilterOperator.EQUALS:
        return SlotOperator.EQ
    if operator is FilterOperator.NOT_EQUALS:
        return SlotOperator.NE
    return None


class ReferenceBuilder(LeafBuilder):
    """Reference cells store a list of row ids; a single id means ``[id]``."""

    @property
    def name(self) -> str:
        return TypeFamily.REFERENCE.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        op = _equality(operator)
        if op is None:
            raise self.unsupported(operator)
        return slot(CellSlot.GENERIC, op, as_reference_list(value))


class EnumerationBuilder(LeafBuilder):
    """Custom-option columns: exact match, no case folding."""

    @property
    def name(self) -> str:
        return TypeFamily.ENUMERATION.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        op = _equality(operator)
        if op is None:
            raise self.unsupported(operator)
        return slot(CellSlot.GENERIC, op, value)
