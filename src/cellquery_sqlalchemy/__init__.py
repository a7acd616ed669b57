"""
SQLAlchemy backend for cellquery predicate trees.

Usage::

    from cellquery import FilterCompiler, RowListParams
    from cellquery_sqlalchemy import count_rows, select_rows

    compiled = FilterCompiler(table_id, columns).compile(params.filters, params.global_search)
    rows = session.scalars(select_rows(compiled, params)).all()
    total = session.scalar(count_rows(compiled))
"""

from __future__ import annotations

from .compiler import build_row_filter, count_rows, select_rows
from .functions import json_text
from .models import DEFAULT_SCHEMA, Base, CellModel, CellSchema, RowModel
from .operators import DEFAULT_SQLA_REGISTRY, build_default_registry
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry
from .types import JSONType

__all__ = [
    "DEFAULT_SCHEMA",
    "DEFAULT_SQLA_REGISTRY",
    "Base",
    "CellModel",
    "CellSchema",
    "JSONType",
    "RowModel",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "build_default_registry",
    "build_row_filter",
    "count_rows",
    "json_text",
    "select_rows",
]
