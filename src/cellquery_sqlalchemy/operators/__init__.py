"""SQLAlchemy slot operator implementations."""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
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


def build_default_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with every slot operator."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        ContainsOperator(),
        NotContainsOperator(),
        IContainsOperator(),
        NotIContainsOperator(),
        StartsWithOperator(),
        IStartsWithOperator(),
        EndsWithOperator(),
        IEndsWithOperator(),
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry


DEFAULT_SQLA_REGISTRY = build_default_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperatorRegistry",
    "build_default_registry",
]
