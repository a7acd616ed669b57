"""Row-listing query parameters: filters, search, paging and sorting."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, NamedTuple
from urllib.parse import unquote

from pydantic import ValidationError

from .models import FilterSpec

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100
SORTABLE_FIELDS = frozenset({"id", "createdAt"})


def parse_filters_param(raw: str | None) -> list[FilterSpec]:
    """
    Parse the ``filters`` query parameter (URL-encoded JSON array).

    A payload that is not a JSON array yields ``[]``; individual entries
    that do not form a filter are skipped.
    """
    if not raw:
        return []
    try:
        payload = json.loads(unquote(raw))
    except ValueError:
        logger.warning("Ignoring malformed filters parameter")
        return []
    if not isinstance(payload, list):
        return []

    specs: list[FilterSpec] = []
    for index, entry in enumerate(payload):
        try:
            specs.append(FilterSpec.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping filter #%d: %d validation error(s)", index, exc.error_count())
    return specs


def _int_param(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class PageInfo(NamedTuple):
    page: int
    page_size: int
    total_rows: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalRows": self.total_rows,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass(frozen=True)
class RowListParams:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    global_search: str = ""
    filters: list[FilterSpec] = field(default_factory=list)
    sort_by: str = "id"
    sort_order: str = "asc"
    include_cells: bool = True

    @classmethod
    def from_query(cls, query: dict[str, Any]) -> RowListParams:
        """
        Build params from raw query-string values.

        Out-of-range paging values are clamped, unknown sort fields fall
        back to ``id`` ascending.
        """
        page = max(1, _int_param(query.get("page"), 1))
        page_size = _int_param(query.get("pageSize"), DEFAULT_PAGE_SIZE)
        page_size = min(MAX_PAGE_SIZE, max(1, page_size))

        sort_by = query.get("sortBy") or "id"
        sort_order = "desc" if query.get("sortOrder") == "desc" else "asc"
        if sort_by not in SORTABLE_FIELDS:
            sort_by, sort_order = "id", "asc"

        return cls(
            page=page,
            page_size=page_size,
            global_search=(query.get("globalSearch") or "").strip(),
            filters=parse_filters_param(query.get("filters")),
            sort_by=sort_by,
            sort_order=sort_order,
            include_cells=query.get("includeCells") != "false",
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_criteria(self) -> bool:
        return bool(self.filters) or self.global_search != ""

    def page_info(self, total_rows: int) -> PageInfo:
        total_pages = math.ceil(total_rows / self.page_size)
        return PageInfo(
            page=self.page,
            page_size=self.page_size,
            total_rows=total_rows,
            total_pages=total_pages,
            has_next=self.page < total_pages,
            has_prev=self.page > 1,
        )
