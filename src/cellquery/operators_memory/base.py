"""
Slot operator strategies for in-memory evaluation.

Comparisons against a missing (``None``) slot value are false, as they are
in SQL; only the null checks look at ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..operators import SlotOperator


class MemoryOperator(ABC):
    @property
    @abstractmethod
    def name(self) -> SlotOperator:
        """Slot operator evaluated by this strategy."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """Test a cell's slot value (*field_value*) against the leaf value."""
        ...


class MemoryOperatorRegistry:
    """Slot operator strategies for Python values, keyed by :class:`SlotOperator`."""

    def __init__(self) -> None:
        self._strategies: dict[SlotOperator, MemoryOperator] = {}

    def register(self, strategy: MemoryOperator) -> None:
        self._strategies[strategy.name] = strategy

    def register_all(self, *strategies: MemoryOperator) -> None:
        for strategy in strategies:
            self.register(strategy)

    def unregister(self, name: SlotOperator) -> None:
        self._strategies.pop(name, None)

    def get(self, name: SlotOperator) -> MemoryOperator | None:
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

    def evaluate(self, name: SlotOperator, field_value: Any, condition_value: Any) -> bool:
        """Evaluate one leaf; ``ValueError`` when *name* has no strategy."""
        strategy = self._strategies.get(name)
        if strategy is None:
            raise ValueError(f"No in-memory strategy registered for slot operator {name.value!r}")
        return strategy.evaluate(field_value, condition_value)
