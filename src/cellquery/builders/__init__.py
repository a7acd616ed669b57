"""
Leaf-condition builders.

Usage::

    from cellquery.builders import build_default_registry

    registry = build_default_registry()
    predicate = registry.build(FilterOperator.CONTAINS, "report", None, context)
"""

from __future__ import annotations

from .base import (
    EMPTY_KEY,
    RANGE_KEY,
    BuildContext,
    LeafBuilder,
    LeafBuilderRegistry,
    with_generic_fallback,
)
from .boolean import BooleanBuilder
from .empty import ALL_SLOTS, EmptyBuilder
from .generic import GenericBuilder
from .numeric import NumericBuilder
from .range import RangeBuilder
from .reference import EnumerationBuilder, ReferenceBuilder
from .temporal import TemporalBuilder
from .text import TextBuilder


def build_default_registry() -> LeafBuilderRegistry:
    """Create a registry holding every built-in builder."""
    registry = LeafBuilderRegistry()
    registry.register_all(
        TextBuilder(),
        NumericBuilder(),
        BooleanBuilder(),
        TemporalBuilder(),
        ReferenceBuilder(),
        EnumerationBuilder(),
        GenericBuilder(),
        RangeBuilder(),
        EmptyBuilder(),
    )
    return registry


__all__ = [
    "ALL_SLOTS",
    "EMPTY_KEY",
    "RANGE_KEY",
    "BooleanBuilder",
    "BuildContext",
    "EmptyBuilder",
    "EnumerationBuilder",
    "GenericBuilder",
    "LeafBuilder",
    "LeafBuilderRegistry",
    "NumericBuilder",
    "RangeBuilder",
    "ReferenceBuilder",
    "TemporalBuilder",
    "TextBuilder",
    "build_default_registry",
    "with_generic_fallback",
]
