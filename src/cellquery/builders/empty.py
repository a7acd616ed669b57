"""``is_empty`` / ``is_not_empty`` for every column type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import EmptyPolicy
from ..operators import CellSlot, FilterOperator, SlotOperator
from ..predicates import all_of, any_of, slot
from .base import EMPTY_KEY, BuildContext, LeafBuilder

if TYPE_CHECKING:
    from ..predicates import Predicate

ALL_SLOTS: tuple[CellSlot, ...] = (
    CellSlot.STRING,
    CellSlot.NUMBER,
    CellSlot.DATE,
    CellSlot.BOOLEAN,
    CellSlot.GENERIC,
)


class EmptyBuilder(LeafBuilder):
    """
    Test all five slots at once.

    Empty always means every slot is null.  Not-empty means every slot is
    non-null under :attr:`EmptyPolicy.STRICT` and at least one slot is
    non-null under :attr:`EmptyPolicy.ANY_SLOT`.
    """

    @property
    def name(self) -> str:
        return EMPTY_KEY

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        if operator is FilterOperator.IS_EMPTY:
            return all_of(*(slot(s, SlotOperator.IS_NULL) for s in ALL_SLOTS))
        if operator is FilterOperator.IS_NOT_EMPTY:
            not_null = [slot(s, SlotOperator.IS_NOT_NULL) for s in ALL_SLOTS]
            if context.config.empty_policy is EmptyPolicy.ANY_SLOT:
                return any_of(*not_null)
            return all_of(*not_null)
        raise self.unsupported(operator)
