"""
cellquery: compile user table filters into composable predicate trees.

Usage::

    from cellquery import ColumnDescriptor, FilterCompiler

    columns = [ColumnDescriptor(id=1, name="title", type="text")]
    compiled = FilterCompiler(7, columns).compile(
        [{"columnId": 1, "operator": "contains", "value": "report"}],
        search="2024",
    )
"""

from __future__ import annotations

from .compatibility import (
    OPERATOR_COMPATIBILITY,
    ensure_operator_valid,
    get_available_operators,
    is_operator_valid,
)
from .compiler import CompiledFilter, DroppedFilter, FilterCompiler, compile_filters
from .config import MONDAY, SUNDAY, CompilerConfig, EmptyPolicy
from .evaluator import CellRecord, PredicateEvaluator, RowRecord
from .exceptions import (
    CellQueryError,
    FilterValidationError,
    FilterValueError,
    OperatorNotAllowedError,
    PredicateError,
    UnknownColumnError,
    UnsupportedOperatorError,
)
from .models import ColumnDescriptor, FilterSpec
from .operators import CellSlot, ColumnType, FilterOperator, SlotOperator, TypeFamily
from .params import PageInfo, RowListParams, parse_filters_param
from .predicates import (
    AndPredicate,
    CellPredicate,
    OrPredicate,
    Predicate,
    SlotPredicate,
    TablePredicate,
    predicate_from_dict,
)
from .search import build_search_predicate
from .validation import FilterValidator, ValidationReport, is_valid_filter

__all__ = [
    "MONDAY",
    "OPERATOR_COMPATIBILITY",
    "SUNDAY",
    "AndPredicate",
    "CellPredicate",
    "CellQueryError",
    "CellRecord",
    "CellSlot",
    "ColumnDescriptor",
    "ColumnType",
    "CompiledFilter",
    "CompilerConfig",
    "DroppedFilter",
    "EmptyPolicy",
    "FilterCompiler",
    "FilterOperator",
    "FilterSpec",
    "FilterValidationError",
    "FilterValidator",
    "FilterValueError",
    "OperatorNotAllowedError",
    "OrPredicate",
    "PageInfo",
    "Predicate",
    "PredicateError",
    "PredicateEvaluator",
    "RowListParams",
    "RowRecord",
    "SlotOperator",
    "SlotPredicate",
    "TablePredicate",
    "TypeFamily",
    "UnknownColumnError",
    "UnsupportedOperatorError",
    "ValidationReport",
    "build_search_predicate",
    "compile_filters",
    "ensure_operator_valid",
    "get_available_operators",
    "is_operator_valid",
    "is_valid_filter",
    "parse_filters_param",
]
