"""
In-memory slot operator implementations.

Usage::

    from cellquery.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate(SlotOperator.ICONTAINS, "Quarterly Report", "report")
"""

from __future__ import annotations

from .base import MemoryOperator, MemoryOperatorRegistry
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    IsNotNullOperator,
    IsNullOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    ContainsOperator,
    EndsWithOperator,
    IContainsOperator,
    IEndsWithOperator,
    IStartsWithOperator,
    NotContainsOperator,
    NotIContainsOperator,
    StartsWithOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a registry with every slot operator."""
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        # Substring
        ContainsOperator(),
        NotContainsOperator(),
        IContainsOperator(),
        NotIContainsOperator(),
        StartsWithOperator(),
        IStartsWithOperator(),
        EndsWithOperator(),
        IEndsWithOperator(),
        # Null
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry


__all__ = [
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
]
