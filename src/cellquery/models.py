"""Input models: column descriptors and filter specifications."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ColumnDescriptor(BaseModel):
    """Column metadata supplied by the table-schema subsystem.

    Immutable for the duration of a compile call.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    name: str = ""
    type: str
    custom_options: list[str] | None = Field(default=None, alias="customOptions")


class FilterSpec(BaseModel):
    """One user-composed column filter.

    Field names accept both the camelCase wire format
    (``columnId``, ``secondValue``, ``columnType``) and snake_case.
    ``operator`` and ``column_type`` are kept as raw strings: unknown
    values are rejected by validation, not by parsing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    column_id: int = Field(alias="columnId")
    operator: str
    value: Any = None
    second_value: Any = Field(default=None, alias="secondValue")
    column_type: str | None = Field(default=None, alias="columnType")
    column_name: str | None = Field(default=None, alias="columnName")
    id: str | None = None

    def with_column_type(self, column_type: str) -> FilterSpec:
        """Return a copy with ``column_type`` filled in."""
        return self.model_copy(update={"column_type": column_type})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
