"""
Substring operators.

User text is matched literally: ``%`` and ``_`` in the value are escaped.
Case-insensitive variants render as ``ILIKE`` on PostgreSQL and as
``lower(x) LIKE lower(y)`` elsewhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from cellquery.operators import SlotOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class ContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.contains(str(value), autoescape=True))


class NotContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.NOT_CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", ~column.contains(str(value), autoescape=True))


class IContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ICONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.icontains(str(value), autoescape=True))


class NotIContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.NOT_ICONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", ~column.icontains(str(value), autoescape=True))


class StartsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.STARTSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.startswith(str(value), autoescape=True))


class IStartsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ISTARTSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.istartswith(str(value), autoescape=True))


class EndsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.ENDSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.endswith(str(value), autoescape=True))


class IEndsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> SlotOperator:
        return SlotOperator.IENDSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.iendswith(str(value), autoescape=True))
