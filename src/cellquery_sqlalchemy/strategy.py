"""
Slot operator strategies for the SQL backend.

Each :class:`~cellquery.operators.SlotOperator` maps to one
:class:`SQLAlchemyOperator` that turns a slot column and a leaf value into
a boolean clause.  The in-memory counterpart lives in
:mod:`cellquery.operators_memory`; both registries must cover the same
operators so a tree evaluates the same way in Python and in SQL.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from cellquery.operators import SlotOperator

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement


class SQLAlchemyOperator(ABC):
    @property
    @abstractmethod
    def name(self) -> SlotOperator:
        """Slot operator compiled by this strategy."""
        ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Compile ``column <op> value``.

        *column* is the slot column, or ``json_text(value)`` for generic
        scalars; *value* is the leaf's value, already coerced.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """Slot operator strategies for SQL, keyed by :class:`SlotOperator`."""

    def __init__(self) -> None:
        self._strategies: dict[SlotOperator, SQLAlchemyOperator] = {}

    def register(self, strategy: SQLAlchemyOperator) -> None:
        self._strategies[strategy.name] = strategy

    def register_all(self, *strategies: SQLAlchemyOperator) -> None:
        for strategy in strategies:
            self.register(strategy)

    def unregister(self, name: SlotOperator) -> None:
        self._strategies.pop(name, None)

    def get(self, name: SlotOperator) -> SQLAlchemyOperator | None:
        return self._strategies.get(name)

    def has(self, name: SlotOperator) -> bool:
        return name in self._strategies

    @property
    def supported_operators(self) -> set[SlotOperator]:
        return set(self._strategies)

    @property
    def missing_operators(self) -> set[SlotOperator]:
        """Slot operators with no registered strategy."""
        return set(SlotOperator) - self.supported_operators

    def apply(self, name: SlotOperator, column: Any, value: Any) -> ColumnElement[bool]:
        """Compile one leaf; ``ValueError`` when *name* has no strategy."""
        strategy = self._strategies.get(name)
        if strategy is None:
            raise ValueError(f"No SQL strategy registered for slot operator {name.value!r}")
        return strategy.apply(column, value)
