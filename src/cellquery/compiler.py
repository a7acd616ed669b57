"""
Top-level filter compiler.

Combines the table scope, an optional global search and one cell
predicate per surviving filter into a single AND tree.  Invalid filters
are dropped with a warning instead of failing the whole compilation.

Usage::

    compiler = FilterCompiler(table_id=7, columns=columns)
    compiled = compiler.compile(filters, search="report")
    compiled.predicate      # TablePredicate or AndPredicate
    compiled.has_filters    # False when only the table scope applies
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .builders import BuildContext, build_default_registry
from .compatibility import ensure_operator_valid
from .config import CompilerConfig
from .exceptions import CellQueryError, FilterValidationError, UnknownColumnError
from .models import ColumnDescriptor, FilterSpec
from .operators import FilterOperator, column_type_of
from .predicates import AndPredicate, CellPredicate, TablePredicate
from .search import build_search_predicate
from .validation import find_column, is_valid_filter

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .builders import LeafBuilderRegistry
    from .predicates import Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DroppedFilter:
    """A filter left out of the compiled tree, with the reason why."""

    filter: FilterSpec | Mapping[str, Any]
    reason: str


@dataclass(frozen=True)
class CompiledFilter:
    predicate: Predicate
    has_filters: bool
    applied: list[FilterSpec] = field(default_factory=list)
    dropped: list[DroppedFilter] = field(default_factory=list)
    search: str | None = None


class FilterCompiler:
    """
    Compile user filters for one table.

    Column metadata is supplied once per compiler and treated as
    read-only; the compiler itself holds no mutable state.
    """

    def __init__(
        self,
        table_id: int,
        columns: Iterable[ColumnDescriptor | Mapping[str, Any]],
        config: CompilerConfig | None = None,
        registry: LeafBuilderRegistry | None = None,
    ) -> None:
        self.table_id = table_id
        self.columns: tuple[ColumnDescriptor, ...] = tuple(
            c if isinstance(c, ColumnDescriptor) else ColumnDescriptor.model_validate(c)
            for c in columns
        )
        self.config = config or CompilerConfig()
        self.registry = registry or build_default_registry()

    def compile(
        self,
        filters: Sequence[FilterSpec | Mapping[str, Any]] | None = None,
        search: str | None = None,
    ) -> CompiledFilter:
        table = TablePredicate(self.table_id)
        conditions: list[Predicate] = [table]
        applied: list[FilterSpec] = []
        dropped: list[DroppedFilter] = []

        search_predicate = build_search_predicate(search, self.config)
        if search_predicate is not None:
            conditions.append(search_predicate)

        # one clock reading per compile so every relative filter agrees on "now"
        now = self.config.now()
        for raw in filters or ():
            try:
                spec, leaf = self._compile_filter(raw, now)
            except CellQueryError as exc:
                logger.warning("Dropping filter %r: %s", _describe(raw), exc)
                dropped.append(DroppedFilter(raw, str(exc)))
                continue
            applied.append(spec)
            conditions.append(CellPredicate(spec.column_id, leaf))

        has_filters = len(conditions) > 1
        predicate: Predicate = AndPredicate(tuple(conditions)) if has_filters else table
        logger.debug(
            "Compiled table %s: %d filter(s) applied, %d dropped, search=%s",
            self.table_id,
            len(applied),
            len(dropped),
            search_predicate is not None,
        )
        return CompiledFilter(
            predicate=predicate,
            has_filters=has_filters,
            applied=applied,
            dropped=dropped,
            search=search.strip() if search_predicate is not None and search else None,
        )

    def _compile_filter(
        self, raw: FilterSpec | Mapping[str, Any], now: datetime.datetime
    ) -> tuple[FilterSpec, Predicate]:
        spec = self._coerce_spec(raw)
        column = find_column(spec.column_id, self.columns)
        if column is None:
            raise UnknownColumnError(spec.column_id, [c.id for c in self.columns])
        if spec.column_type is None:
            spec = spec.with_column_type(column.type)
        if not is_valid_filter(spec, self.columns):
            raise FilterValidationError(
                f"Operator '{spec.operator}' requires a value", path="value"
            )

        column_type = spec.column_type or column.type
        ensure_operator_valid(spec.operator, column_type)

        context = BuildContext(
            config=self.config,
            now=now,
            column_type=column_type_of(column_type),
        )
        leaf = self.registry.build(
            FilterOperator(spec.operator), spec.value, spec.second_value, context
        )
        return spec, leaf

    @staticmethod
    def _coerce_spec(raw: FilterSpec | Mapping[str, Any]) -> FilterSpec:
        if isinstance(raw, FilterSpec):
            return raw
        try:
            return FilterSpec.model_validate(raw)
        except ValidationError as exc:
            raise FilterValidationError(f"Malformed filter: {exc.error_count()} error(s)") from exc


def _describe(raw: FilterSpec | Mapping[str, Any]) -> Any:
    return raw.to_dict() if isinstance(raw, FilterSpec) else raw


def compile_filters(
    table_id: int,
    columns: Iterable[ColumnDescriptor | Mapping[str, Any]],
    filters: Sequence[FilterSpec | Mapping[str, Any]] | None = None,
    search: str | None = None,
    config: CompilerConfig | None = None,
) -> CompiledFilter:
    """One-shot shortcut for ``FilterCompiler(...).compile(...)``."""
    return FilterCompiler(table_id, columns, config).compile(filters, search)
