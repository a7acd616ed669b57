"""Operator, column-type and cell-slot vocabulary shared by every module."""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """User-facing filter operators, as sent by the table UI."""

    # Comparison
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"

    # Text
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"

    # Range
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"

    # Temporal
    BEFORE = "before"
    AFTER = "after"
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"

    # Emptiness
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"


class ColumnType(str, Enum):
    """Semantic column types of a user table."""

    TEXT = "text"
    STRING = "string"
    EMAIL = "email"
    URL = "url"
    NUMBER = "number"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    REFERENCE = "reference"
    CUSTOM_ARRAY = "customArray"
    JSON = "json"


class TypeFamily(str, Enum):
    """Groups of column types that share one leaf builder."""

    TEXT = "text"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    REFERENCE = "reference"
    ENUMERATION = "enumeration"
    GENERIC = "generic"


class CellSlot(str, Enum):
    """Value slots carried by every cell."""

    STRING = "string_value"
    NUMBER = "number_value"
    DATE = "date_value"
    BOOLEAN = "boolean_value"
    GENERIC = "value"


class SlotOperator(str, Enum):
    """Comparison operators of a single slot test (predicate leaves)."""

    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    ICONTAINS = "icontains"
    NOT_ICONTAINS = "not_icontains"
    STARTSWITH = "startswith"
    ISTARTSWITH = "istartswith"
    ENDSWITH = "endswith"
    IENDSWITH = "iendswith"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"


TYPE_FAMILIES: dict[ColumnType, TypeFamily] = {
    ColumnType.TEXT: TypeFamily.TEXT,
    ColumnType.STRING: TypeFamily.TEXT,
    ColumnType.EMAIL: TypeFamily.TEXT,
    ColumnType.URL: TypeFamily.TEXT,
    ColumnType.NUMBER: TypeFamily.NUMERIC,
    ColumnType.INTEGER: TypeFamily.NUMERIC,
    ColumnType.DECIMAL: TypeFamily.NUMERIC,
    ColumnType.BOOLEAN: TypeFamily.BOOLEAN,
    ColumnType.DATE: TypeFamily.TEMPORAL,
    ColumnType.DATETIME: TypeFamily.TEMPORAL,
    ColumnType.TIME: TypeFamily.TEMPORAL,
    ColumnType.REFERENCE: TypeFamily.REFERENCE,
    ColumnType.CUSTOM_ARRAY: TypeFamily.ENUMERATION,
    ColumnType.JSON: TypeFamily.GENERIC,
}

RELATIVE_DATE_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.TODAY,
        FilterOperator.YESTERDAY,
        FilterOperator.THIS_WEEK,
        FilterOperator.LAST_WEEK,
        FilterOperator.THIS_MONTH,
        FilterOperator.LAST_MONTH,
        FilterOperator.THIS_YEAR,
        FilterOperator.LAST_YEAR,
    }
)

EMPTY_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.IS_EMPTY, FilterOperator.IS_NOT_EMPTY}
)

RANGE_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.BETWEEN, FilterOperator.NOT_BETWEEN}
)

# Operators that compile without a user-supplied value.
NO_VALUE_OPERATORS: frozenset[FilterOperator] = EMPTY_OPERATORS | RELATIVE_DATE_OPERATORS


def column_type_of(value: str | ColumnType | None) -> ColumnType | None:
    """Return the ``ColumnType`` for *value*, or ``None`` when unknown."""
    if value is None:
        return None
    if isinstance(value, ColumnType):
        return value
    try:
        return ColumnType(value)
    except ValueError:
        return None


def filter_operator_of(value: str | FilterOperator | None) -> FilterOperator | None:
    """Return the ``FilterOperator`` for *value*, or ``None`` when unknown."""
    if value is None:
        return None
    if isinstance(value, FilterOperator):
        return value
    try:
        return FilterOperator(value)
    except ValueError:
        return None


def family_of(column_type: str | ColumnType | None) -> TypeFamily | None:
    """Return the builder family of *column_type* (``None`` when unknown)."""
    ct = column_type_of(column_type)
    return TYPE_FAMILIES.get(ct) if ct is not None else None
