"""
Leaf-builder strategy interface and registry.

A leaf builder turns one validated filter (operator, value, second value)
into a slot-level predicate for a single cell.  Builders are looked up by
key: the column's type family for ordinary operators, ``"range"`` for
``between``/``not_between`` and ``"empty"`` for the emptiness operators.
New column families are supported by registering another builder.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import UnsupportedOperatorError
from ..operators import (
    EMPTY_OPERATORS,
    RANGE_OPERATORS,
    CellSlot,
    ColumnType,
    FilterOperator,
    SlotOperator,
    TypeFamily,
    family_of,
)
from ..predicates import all_of, any_of, slot

if TYPE_CHECKING:
    from ..config import CompilerConfig
    from ..predicates import Predicate

RANGE_KEY = "range"
EMPTY_KEY = "empty"


@dataclass(frozen=True)
class BuildContext:
    """Per-filter inputs shared by every builder."""

    config: CompilerConfig
    now: datetime.datetime
    column_type: ColumnType | None = None

    @property
    def family(self) -> TypeFamily:
        return family_of(self.column_type) or TypeFamily.GENERIC


def with_generic_fallback(
    typed_slot: CellSlot,
    typed_condition: Predicate,
    generic_condition: Predicate,
) -> Predicate:
    """
    Match the typed slot, or the generic slot for cells that predate it.

    ``(typed NOT NULL AND typed_condition)
    OR (typed IS NULL AND generic NOT NULL AND generic_condition)``
    """
    return any_of(
        all_of(slot(typed_slot, SlotOperator.IS_NOT_NULL), typed_condition),
        all_of(
            slot(typed_slot, SlotOperator.IS_NULL),
            slot(CellSlot.GENERIC, SlotOperator.IS_NOT_NULL),
            generic_condition,
        ),
    )


class LeafBuilder(ABC):
    """Strategy interface for compiling one filter into a cell predicate."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key: a :class:`TypeFamily` value, ``"range"`` or ``"empty"``."""
        ...

    @abstractmethod
    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        """
        Build the cell-level predicate.

        Raises:
            FilterValueError: If a value cannot be coerced.
            UnsupportedOperatorError: If the operator has no condition here.
        """
        ...

    def unsupported(self, operator: FilterOperator) -> UnsupportedOperatorError:
        return UnsupportedOperatorError(operator.value, self.name)


class LeafBuilderRegistry:
    """
    Registry of :class:`LeafBuilder` instances keyed by builder name.

    Usage::

        registry = LeafBuilderRegistry()
        registry.register(TextBuilder())

        predicate = registry.build(FilterOperator.CONTAINS, "x", None, context)
    """

    def __init__(self) -> None:
        self._builders: dict[str, LeafBuilder] = {}

    def register(self, builder: LeafBuilder) -> None:
        self._builders[builder.name] = builder

    def register_all(self, *builders: LeafBuilder) -> None:
        for builder in builders:
            self.register(builder)

    def unregister(self, name: str) -> None:
        self._builders.pop(name, None)

    def get(self, name: str) -> LeafBuilder | None:
        return self._builders.get(name)

    def has(self, name: str) -> bool:
        return name in self._builders

    @property
    def names(self) -> set[str]:
        return set(self._builders.keys())

    def resolve(self, operator: FilterOperator, context: BuildContext) -> LeafBuilder:
        """
        Pick the builder for *operator* on the context's column type.

        Emptiness and range operators take precedence over the family
        builder; unknown families fall back to the generic builder.
        """
        if operator in EMPTY_OPERATORS:
            key = EMPTY_KEY
        elif operator in RANGE_OPERATORS:
            key = RANGE_KEY
        else:
            key = context.family.value
        builder = self.get(key) or self.get(TypeFamily.GENERIC.value)
        if builder is None:
            raise UnsupportedOperatorError(operator.value, key)
        return builder

    def build(
        self,
        operator: FilterOperator,
        value: Any,
        second_value: Any,
        context: BuildContext,
    ) -> Predicate:
        return self.resolve(operator, context).build(operator, value, second_value, context)
