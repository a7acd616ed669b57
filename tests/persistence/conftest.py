"""Async in-memory SQLite database seeded with rows of table 7."""

from __future__ import annotations

import datetime
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cellquery_sqlalchemy import Base, CellModel, RowModel

TITLE, AMOUNT, DUE, ACTIVE, OWNER, STATUS, META = range(1, 8)


def _row(row_id: int, cells: dict[int, dict[str, Any]], table_id: int = 7) -> RowModel:
    return RowModel(
        id=row_id,
        table_id=table_id,
        created_at=datetime.datetime(2024, 1, row_id),
        cells=[CellModel(column_id=cid, **slots) for cid, slots in cells.items()],
    )


def _seed_rows() -> list[RowModel]:
    """Rows 1-4 belong to table 7, row 5 to table 8."""
    return [
        _row(
            1,
            {
                TITLE: {"string_value": "Quarterly Report"},
                AMOUNT: {"number_value": 10},
                DUE: {"date_value": datetime.datetime(2024, 3, 5, 9)},
                ACTIVE: {"boolean_value": True},
                OWNER: {"value": [12]},
            },
        ),
        _row(
            2,
            {
                TITLE: {"string_value": "Invoice"},
                AMOUNT: {"value": "15"},
                DUE: {"value": "2024-03-20"},
                ACTIVE: {"value": False},
                OWNER: {"value": [12, 13]},
            },
        ),
        _row(
            3,
            {
                TITLE: {"value": "annual report"},
                AMOUNT: {"number_value": 21},
                DUE: {"date_value": datetime.datetime(2024, 4, 2)},
                STATUS: {"value": "Open"},
            },
        ),
        _row(
            4,
            {
                TITLE: {},
                AMOUNT: {"value": 5},
                ACTIVE: {"value": "true"},
                META: {"value": {"city": "Athens"}},
            },
        ),
        _row(5, {TITLE: {"string_value": "Quarterly Report"}}, table_id=8),
    ]


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        sess.add_all(_seed_rows())
        await sess.commit()
        yield sess
