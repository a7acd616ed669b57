"""
Filter compiler exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``CellQueryError`` and provide ``to_dict()``
for API-friendly error responses.  The compiler itself never lets them
escape: a filter that raises is dropped and logged.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class CellQueryError(Exception):
    """Base exception for all filter compiler errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterValidationError(CellQueryError):
    """A filter specification is structurally invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class UnknownColumnError(FilterValidationError):
    """The filter references a column that is not part of the table."""

    def __init__(self, column_id: Any, available_ids: list[int]) -> None:
        self.column_id = column_id
        self.available_ids = available_ids
        super().__init__(f"Column with ID {column_id} not found", path="columnId")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "COLUMN_NOT_FOUND",
            "column_id": self.column_id,
            "available_ids": sorted(self.available_ids),
        }


class OperatorNotAllowedError(FilterValidationError):
    """
    Operator is unknown or not compatible with the column type.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(
        self,
        operator: str,
        column_type: str,
        valid_operators: list[str],
    ) -> None:
        self.operator = operator
        self.column_type = column_type
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = (
            f"Operator '{operator}' is not compatible with column type '{column_type}'"
        )
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, path="operator")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_ALLOWED",
            "operator": self.operator,
            "column_type": self.column_type,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FilterValueError(FilterValidationError):
    """A filter value cannot be coerced to the column's type."""

    def __init__(self, value: Any, target: str, reason: str | None = None) -> None:
        self.value = value
        self.target = target
        message = f"Cannot convert {value!r} to {target}"
        if reason:
            message += f": {reason}"
        super().__init__(message, path="value")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_VALUE",
            "value": repr(self.value),
            "target": self.target,
            "message": self.message,
        }


class UnsupportedOperatorError(CellQueryError):
    """A leaf builder was asked for an operator it has no condition for."""

    def __init__(self, operator: str, builder: str) -> None:
        self.operator = operator
        self.builder = builder
        super().__init__(f"Builder '{builder}' does not support operator '{operator}'")


class PredicateError(CellQueryError):
    """A predicate tree is malformed (unknown node or slot operator)."""
