"""Compiler configuration."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

SUNDAY = 6
MONDAY = 0


class EmptyPolicy(str, Enum):
    """How ``is_empty`` / ``is_not_empty`` treat the five cell slots.

    ``STRICT``: empty means every slot is null, not-empty means every slot
    is non-null.  ``ANY_SLOT``: not-empty means at least one slot is
    non-null.  Under both policies the two operators never match the same
    cell.
    """

    STRICT = "strict"
    ANY_SLOT = "any_slot"


def _system_clock() -> datetime.datetime:
    return datetime.datetime.now()


@dataclass(frozen=True)
class CompilerConfig:
    """
    Immutable settings for :class:`~cellquery.compiler.FilterCompiler`.

    Attributes:
        clock: Returns the current wall-clock time used to anchor relative
            date operators (``today``, ``this_week``, ...).
        timezone: Zone that aware datetimes (filter values and the clock)
            are converted into before their tzinfo is dropped.  ``None``
            means the local zone.
        week_start: Python weekday number (Monday=0) on which weeks begin.
        empty_policy: Semantics of the emptiness operators.
        search_min_length: Global search terms shorter than this (after
            trimming) are ignored.
    """

    clock: Callable[[], datetime.datetime] = field(default=_system_clock)
    timezone: datetime.tzinfo | None = None
    week_start: int = SUNDAY
    empty_policy: EmptyPolicy = EmptyPolicy.STRICT
    search_min_length: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"week_start must be a weekday number 0-6, got {self.week_start}")
        if self.search_min_length < 1:
            raise ValueError("search_min_length must be at least 1")

    def now(self) -> datetime.datetime:
        """Return the clock's current time as a naive wall-clock datetime."""
        return to_naive(self.clock(), self.timezone)


def to_naive(value: datetime.datetime, tz: datetime.tzinfo | None = None) -> datetime.datetime:
    """Convert an aware datetime into naive wall-clock time in *tz*."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)
