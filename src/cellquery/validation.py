"""
Filter specification validation.

``is_valid_filter`` is the structural gate the compiler applies before any
builder runs.  ``FilterValidator`` produces a detailed report for callers
that want to tell the user why a filter would be ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .coercion import parse_boolean, parse_datetime, parse_number
from .compatibility import is_operator_valid
from .exceptions import FilterValueError
from .operators import (
    NO_VALUE_OPERATORS,
    RANGE_OPERATORS,
    ColumnType,
    TypeFamily,
    column_type_of,
    family_of,
    filter_operator_of,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import ColumnDescriptor, FilterSpec


def has_value(value: Any) -> bool:
    """True unless *value* is ``None`` or an empty string."""
    return value is not None and value != ""


def find_column(column_id: int, columns: Iterable[ColumnDescriptor]) -> ColumnDescriptor | None:
    for column in columns:
        if column.id == column_id:
            return column
    return None


def is_valid_filter(spec: FilterSpec, columns: Sequence[ColumnDescriptor]) -> bool:
    """
    A filter is valid iff its column exists and it either uses a
    no-value operator or carries a non-empty value.
    """
    if find_column(spec.column_id, columns) is None:
        return False
    op = filter_operator_of(spec.operator)
    if op is not None and op in NO_VALUE_OPERATORS:
        return True
    return has_value(spec.value)


@dataclass(frozen=True)
class ValidationReport:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": self.errors, "warnings": self.warnings}


_FAMILY_TARGETS: dict[TypeFamily, str] = {
    TypeFamily.NUMERIC: "number",
    TypeFamily.BOOLEAN: "boolean",
    TypeFamily.TEMPORAL: "date",
}


def _value_kind(value: Any) -> str:
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    return type(value).__name__


class FilterValidator:
    """Explain, in user-facing messages, what is wrong with filters."""

    def __init__(self, columns: Sequence[ColumnDescriptor]) -> None:
        self._columns = list(columns)

    def validate_filter(self, spec: FilterSpec) -> ValidationReport:
        errors: list[str] = []
        warnings: list[str] = []

        column = find_column(spec.column_id, self._columns)
        if column is None:
            errors.append(f"Column with ID {spec.column_id} not found")
            return ValidationReport(False, errors, warnings)

        raw_type = spec.column_type or column.type
        column_type = column_type_of(raw_type)
        if column_type is None:
            errors.append(f"Invalid column type: {raw_type}")
            return ValidationReport(False, errors, warnings)

        if not is_operator_valid(spec.operator, column_type):
            errors.append(
                f"Operator '{spec.operator}' is not compatible with column type "
                f"'{column_type.value}'"
            )
            return ValidationReport(False, errors, warnings)

        op = filter_operator_of(spec.operator)
        if op in NO_VALUE_OPERATORS:
            return ValidationReport(True, errors, warnings)

        if not has_value(spec.value):
            errors.append(f"Operator '{spec.operator}' requires a value")
        else:
            self._check_value(spec.value, column_type, errors, warnings)

        if op in RANGE_OPERATORS:
            if not has_value(spec.second_value):
                errors.append(f"Range operator '{spec.operator}' requires secondValue")
            else:
                self._check_value(spec.second_value, column_type, errors, warnings)

        return ValidationReport(not errors, errors, warnings)

    def validate_filters(self, specs: Sequence[FilterSpec]) -> ValidationReport:
        """Validate every filter; messages are prefixed with ``Filter N:``."""
        errors: list[str] = []
        warnings: list[str] = []
        for index, spec in enumerate(specs, start=1):
            report = self.validate_filter(spec)
            errors.extend(f"Filter {index}: {message}" for message in report.errors)
            warnings.extend(f"Filter {index}: {message}" for message in report.warnings)
        return ValidationReport(not errors, errors, warnings)

    @staticmethod
    def _check_value(
        value: Any,
        column_type: ColumnType,
        errors: list[str],
        warnings: list[str],
    ) -> None:
        family = family_of(column_type)
        target = _FAMILY_TARGETS.get(family) if family is not None else None
        if target is None:
            return
        try:
            if family is TypeFamily.NUMERIC:
                parse_number(value)
            elif family is TypeFamily.BOOLEAN:
                parse_boolean(value)
            else:
                parse_datetime(value, allow_time_only=column_type is ColumnType.TIME)
        except FilterValueError:
            errors.append(
                f"Expected {target} value for column type '{column_type.value}', "
                f"got {_value_kind(value)}"
            )
            return
        if isinstance(value, str) and family is not TypeFamily.TEMPORAL:
            warnings.append(f"Value '{value}' will be converted to {target}")
