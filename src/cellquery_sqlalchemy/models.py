"""
Row/cell tables and the schema description the compiler reads.

Applications with their own models describe them with a
:class:`CellSchema`; the bundled :class:`RowModel`/:class:`CellModel`
serve tests and simple deployments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from cellquery.operators import CellSlot

from .types import JSONType


class Base(DeclarativeBase):
    pass


class RowModel(Base):
    __tablename__ = "rows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_id: Mapped[int] = mapped_column(Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    cells: Mapped[list[CellModel]] = relationship(
        back_populates="row", cascade="all, delete-orphan"
    )


class CellModel(Base):
    __tablename__ = "cells"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    row_id: Mapped[int] = mapped_column(ForeignKey("rows.id"), index=True)
    column_id: Mapped[int] = mapped_column(Integer, index=True)
    string_value: Mapped[str | None] = mapped_column(String, nullable=True)
    number_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    date_value: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    boolean_value: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    value: Mapped[Any] = mapped_column(JSONType(), nullable=True)

    row: Mapped[RowModel] = relationship(back_populates="cells")


@dataclass(frozen=True)
class CellSchema:
    """Where the compiler finds rows, cells and slots on the ORM models."""

    row_model: type[Any] = RowModel
    cell_model: type[Any] = CellModel
    table_attr: str = "table_id"
    cells_attr: str = "cells"
    column_attr: str = "column_id"
    slot_attrs: dict[CellSlot, str] = field(
        default_factory=lambda: {slot: slot.value for slot in CellSlot}
    )
    sortable: dict[str, str] = field(
        default_factory=lambda: {"id": "id", "createdAt": "created_at"}
    )

    def slot_column(self, slot: CellSlot) -> Any:
        return getattr(self.cell_model, self.slot_attrs[slot])

    def row_attr(self, name: str) -> Any:
        return getattr(self.row_model, name)


DEFAULT_SCHEMA = CellSchema()
