"""
Operator / column-type compatibility table.

The table is plain data: the server-side validator and any client-side
operator picker read the same mapping, so they cannot drift apart.
Unknown column types have no valid operators (fail closed).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from .exceptions import OperatorNotAllowedError
from .operators import ColumnType, FilterOperator, column_type_of, filter_operator_of

if TYPE_CHECKING:
    from collections.abc import Mapping

_F = FilterOperator

_TEXT_OPERATORS: tuple[FilterOperator, ...] = (
    _F.CONTAINS,
    _F.NOT_CONTAINS,
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.STARTS_WITH,
    _F.ENDS_WITH,
    _F.REGEX,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

_NUMERIC_OPERATORS: tuple[FilterOperator, ...] = (
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.GREATER_THAN,
    _F.GREATER_THAN_OR_EQUAL,
    _F.LESS_THAN,
    _F.LESS_THAN_OR_EQUAL,
    _F.BETWEEN,
    _F.NOT_BETWEEN,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

_BOOLEAN_OPERATORS: tuple[FilterOperator, ...] = (
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

_TEMPORAL_OPERATORS: tuple[FilterOperator, ...] = (
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.BEFORE,
    _F.AFTER,
    _F.BETWEEN,
    _F.NOT_BETWEEN,
    _F.TODAY,
    _F.YESTERDAY,
    _F.THIS_WEEK,
    _F.LAST_WEEK,
    _F.THIS_MONTH,
    _F.LAST_MONTH,
    _F.THIS_YEAR,
    _F.LAST_YEAR,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

_SET_OPERATORS: tuple[FilterOperator, ...] = (
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

_GENERIC_OPERATORS: tuple[FilterOperator, ...] = (
    _F.EQUALS,
    _F.NOT_EQUALS,
    _F.CONTAINS,
    _F.NOT_CONTAINS,
    _F.STARTS_WITH,
    _F.ENDS_WITH,
    _F.REGEX,
    _F.IS_EMPTY,
    _F.IS_NOT_EMPTY,
)

OPERATOR_COMPATIBILITY: Mapping[ColumnType, tuple[FilterOperator, ...]] = MappingProxyType(
    {
        ColumnType.TEXT: _TEXT_OPERATORS,
        ColumnType.STRING: _TEXT_OPERATORS,
        ColumnType.EMAIL: _TEXT_OPERATORS,
        ColumnType.URL: _TEXT_OPERATORS,
        ColumnType.NUMBER: _NUMERIC_OPERATORS,
        ColumnType.INTEGER: _NUMERIC_OPERATORS,
        ColumnType.DECIMAL: _NUMERIC_OPERATORS,
        ColumnType.BOOLEAN: _BOOLEAN_OPERATORS,
        ColumnType.DATE: _TEMPORAL_OPERATORS,
        ColumnType.DATETIME: _TEMPORAL_OPERATORS,
        ColumnType.TIME: _TEMPORAL_OPERATORS,
        ColumnType.REFERENCE: _SET_OPERATORS,
        ColumnType.CUSTOM_ARRAY: _SET_OPERATORS,
        ColumnType.JSON: _GENERIC_OPERATORS,
    }
)


def get_available_operators(column_type: str | ColumnType) -> list[str]:
    """Return the operator names allowed for *column_type* (in UI order)."""
    ct = column_type_of(column_type)
    if ct is None:
        return []
    return [op.value for op in OPERATOR_COMPATIBILITY[ct]]


def is_operator_valid(operator: str | FilterOperator, column_type: str | ColumnType) -> bool:
    """
    Return ``True`` when *operator* may be used on a column of *column_type*.

    Never raises: unknown operators and unknown column types are simply
    invalid.
    """
    op = filter_operator_of(operator)
    ct = column_type_of(column_type)
    if op is None or ct is None:
        return False
    return op in OPERATOR_COMPATIBILITY[ct]


def ensure_operator_valid(operator: str | FilterOperator, column_type: str | ColumnType) -> None:
    """Raising variant of :func:`is_operator_valid`."""
    if not is_operator_valid(operator, column_type):
        raise OperatorNotAllowedError(
            str(getattr(operator, "value", operator)),
            str(getattr(column_type, "value", column_type)),
            get_available_operators(column_type),
        )
