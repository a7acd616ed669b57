"""
Compile a cellquery predicate tree into a SQLAlchemy filter expression.

Uses the strategy pattern: each slot operator is an isolated class in
``operators/``, registered in a ``SQLAlchemyOperatorRegistry``.
``build_row_filter`` walks the tree at row level (table scope, cell
existence, AND/OR) and delegates slot leaves to the registry.

A cell predicate becomes ``EXISTS`` over the row's cells
(``Row.cells.any(...)``), restricted to one column unless it is the
global-search node.

Query Options
-------------
``select_rows`` and ``count_rows`` build the paged, ordered listing
statement and its total count from a compiled filter and
:class:`~cellquery.params.RowListParams`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import ColumnElement, Select, and_, asc, desc, func, or_, select

from cellquery.exceptions import PredicateError
from cellquery.operators import CellSlot, SlotOperator
from cellquery.predicates import (
    AndPredicate,
    CellPredicate,
    OrPredicate,
    SlotPredicate,
    TablePredicate,
)

from .functions import json_text
from .models import DEFAULT_SCHEMA
from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from cellquery.compiler import CompiledFilter
    from cellquery.params import RowListParams
    from cellquery.predicates import Predicate

    from .models import CellSchema
    from .strategy import SQLAlchemyOperatorRegistry

_NULL_CHECKS = frozenset({SlotOperator.IS_NULL, SlotOperator.IS_NOT_NULL})

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_row_filter(
    predicate: Predicate,
    *,
    schema: CellSchema | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression over the row model.

    Args:
        predicate: A predicate tree, typically ``CompiledFilter.predicate``.
        schema: Row/cell model description.  Defaults to the bundled
            :class:`~cellquery_sqlalchemy.models.RowModel` and
            :class:`~cellquery_sqlalchemy.models.CellModel`.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Raises:
        PredicateError: If a slot leaf appears outside a cell predicate or
            a row-level node appears inside one.
    """
    return _compile_row(predicate, schema or DEFAULT_SCHEMA, registry or DEFAULT_SQLA_REGISTRY)


def select_rows(
    compiled: CompiledFilter,
    params: RowListParams | None = None,
    *,
    schema: CellSchema | None = None,
) -> Select[Any]:
    """Return the filtered, ordered and paged ``SELECT`` of row models."""
    schema = schema or DEFAULT_SCHEMA
    stmt = select(schema.row_model).where(build_row_filter(compiled.predicate, schema=schema))
    if params is None:
        return stmt.order_by(asc(schema.row_attr("id")))
    stmt = _apply_order_by(stmt, schema, params)
    return stmt.offset(params.offset).limit(params.page_size)


def count_rows(compiled: CompiledFilter, *, schema: CellSchema | None = None) -> Select[Any]:
    """Return ``SELECT count(*)`` over the rows matching *compiled*."""
    schema = schema or DEFAULT_SCHEMA
    return (
        select(func.count())
        .select_from(schema.row_model)
        .where(build_row_filter(compiled.predicate, schema=schema))
    )


def _apply_order_by(stmt: Select[Any], schema: CellSchema, params: RowListParams) -> Select[Any]:
    attr = schema.sortable.get(params.sort_by)
    if attr is None:
        return stmt.order_by(asc(schema.row_attr("id")))
    direction = desc if params.sort_order == "desc" else asc
    return stmt.order_by(direction(schema.row_attr(attr)))


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_row(
    node: Predicate,
    schema: CellSchema,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    if isinstance(node, TablePredicate):
        return cast("ColumnElement[bool]", schema.row_attr(schema.table_attr) == node.table_id)
    if isinstance(node, AndPredicate):
        return and_(*(_compile_row(c, schema, registry) for c in node.conditions))
    if isinstance(node, OrPredicate):
        return or_(*(_compile_row(c, schema, registry) for c in node.conditions))
    if isinstance(node, CellPredicate):
        inner = _compile_cell(node.condition, schema, registry)
        if node.column_id is not None:
            column = getattr(schema.cell_model, schema.column_attr)
            inner = and_(column == node.column_id, inner)
        cells = schema.row_attr(schema.cells_attr)
        return cast("ColumnElement[bool]", cells.any(inner))
    raise PredicateError(f"{type(node).__name__} is not valid at row level")


def _compile_cell(
    node: Predicate,
    schema: CellSchema,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    if isinstance(node, SlotPredicate):
        return _compile_leaf(node, schema, registry)
    if isinstance(node, AndPredicate):
        return and_(*(_compile_cell(c, schema, registry) for c in node.conditions))
    if isinstance(node, OrPredicate):
        return or_(*(_compile_cell(c, schema, registry) for c in node.conditions))
    raise PredicateError(f"{type(node).__name__} is not valid inside a cell predicate")


def _compile_leaf(
    leaf: SlotPredicate,
    schema: CellSchema,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    column = schema.slot_column(leaf.slot)
    if (
        leaf.slot is CellSlot.GENERIC
        and leaf.op not in _NULL_CHECKS
        and not isinstance(leaf.value, list | dict)
    ):
        # scalars in the generic slot compare as text
        column = json_text(column)
    try:
        return registry.apply(leaf.op, column, leaf.value)
    except ValueError as exc:
        raise PredicateError(str(exc)) from exc
