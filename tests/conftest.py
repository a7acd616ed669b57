"""Shared fixtures: a table with one column of every type and a fixed clock."""

from __future__ import annotations

import datetime
from typing import Any

import pytest

from cellquery import (
    CellRecord,
    ColumnDescriptor,
    CompilerConfig,
    FilterCompiler,
    PredicateEvaluator,
    RowRecord,
)

TABLE_ID = 7
FIXED_NOW = datetime.datetime(2024, 3, 20, 10, 30)

TITLE, AMOUNT, DUE, ACTIVE, OWNER, STATUS, META, STARTED, OPENS = range(1, 10)


@pytest.fixture
def columns() -> list[ColumnDescriptor]:
    return [
        ColumnDescriptor(id=TITLE, name="title", type="text"),
        ColumnDescriptor(id=AMOUNT, name="amount", type="number"),
        ColumnDescriptor(id=DUE, name="due", type="date"),
        ColumnDescriptor(id=ACTIVE, name="active", type="boolean"),
        ColumnDescriptor(id=OWNER, name="owner", type="reference"),
        ColumnDescriptor(
            id=STATUS, name="status", type="customArray", customOptions=["Open", "Closed"]
        ),
        ColumnDescriptor(id=META, name="meta", type="json"),
        ColumnDescriptor(id=STARTED, name="started", type="datetime"),
        ColumnDescriptor(id=OPENS, name="opens", type="time"),
    ]


@pytest.fixture
def config() -> CompilerConfig:
    return CompilerConfig(clock=lambda: FIXED_NOW)


@pytest.fixture
def compiler(columns: list[ColumnDescriptor], config: CompilerConfig) -> FilterCompiler:
    return FilterCompiler(TABLE_ID, columns, config)


@pytest.fixture
def evaluator() -> PredicateEvaluator:
    return PredicateEvaluator()


@pytest.fixture
def make_row():
    """Factory: ``make_row(1, {AMOUNT: {"number_value": 5}})``."""

    def _make(row_id: int, cells: dict[int, dict[str, Any]], table_id: int = TABLE_ID) -> RowRecord:
        return RowRecord(
            id=row_id,
            table_id=table_id,
            cells=[CellRecord(column_id=cid, **slots) for cid, slots in cells.items()],
        )

    return _make
