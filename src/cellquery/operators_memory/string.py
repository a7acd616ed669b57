"""Substring operators, case-sensitive and case-insensitive."""

from __future__ import annotations

from typing import Any

from ..operators import SlotOperator
from .base import MemoryOperator


def _texts(field_value: Any, condition_value: Any, fold: bool) -> tuple[str, str]:
    field, needle = str(field_value), str(condition_value)
    if fold:
        return field.lower(), needle.lower()
    return field, needle


class ContainsOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, needle = _texts(field_value, condition_value, fold=False)
        return needle in field


class NotContainsOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.NOT_CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, needle = _texts(field_value, condition_value, fold=False)
        return needle not in field


class IContainsOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ICONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, needle = _texts(field_value, condition_value, fold=True)
        return needle in field


class NotIContainsOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.NOT_ICONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, needle = _texts(field_value, condition_value, fold=True)
        return needle not in field


class StartsWithOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.STARTSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, prefix = _texts(field_value, condition_value, fold=False)
        return field.startswith(prefix)


class IStartsWithOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ISTARTSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, prefix = _texts(field_value, condition_value, fold=True)
        return field.startswith(prefix)


class EndsWithOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ENDSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, suffix = _texts(field_value, condition_value, fold=False)
        return field.endswith(suffix)


class IEndsWithOperator(MemoryOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.IENDSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        field, suffix = _texts(field_value, condition_value, fold=True)
        return field.endswith(suffix)
