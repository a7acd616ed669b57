"""Text-like columns: text, string, email, url."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..coercion import to_generic_text
from ..operators import CellSlot, FilterOperator, SlotOperator, TypeFamily
from ..predicates import slot
from .base import BuildContext, LeafBuilder, with_generic_fallback

if TYPE_CHECKING:
    from ..predicates import Predicate

_S = SlotOperator

# (string slot operator, generic slot operator).  The generic slot holds
# legacy text whose case was never normalised, so its matches are exact.
# ``regex`` is approximated by a substring match.
_TEXT_OPERATORS: dict[FilterOperator, tuple[SlotOperator, SlotOperator]] = {
    FilterOperator.CONTAINS: (_S.ICONTAINS, _S.CONTAINS),
    FilterOperator.NOT_CONTAINS: (_S.NOT_ICONTAINS, _S.NOT_CONTAINS),
    FilterOperator.EQUALS: (_S.EQ, _S.EQ),
    FilterOperator.NOT_EQUALS: (_S.NE, _S.NE),
    FilterOperator.STARTS_WITH: (_S.ISTARTSWITH, _S.STARTSWITH),
    FilterOperator.ENDS_WITH: (_S.IENDSWITH, _S.ENDSWITH),
    FilterOperator.REGEX: (_S.ICONTAINS, _S.CONTAINS),
}


class TextBuilder(LeafBuilder):
    @property
    def name(self) -> str:
        return TypeFamily.TEXT.value

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        try:
            typed_op, generic_op = _TEXT_OPERATORS[operator]
        except KeyError:
            raise self.unsupported(operator) from None
        text = value if isinstance(value, str) else to_generic_text(value)
        return with_generic_fallback(
            CellSlot.STRING,
            slot(CellSlot.STRING, typed_op, text),
            slot(CellSlot.GENERIC, generic_op, text),
        )
