"""
Relative-date windows.

Every window is a half-open ``[start, end)`` range of naive wall-clock
datetimes anchored to a caller-supplied *now*.  Weeks start on
*week_start* (Sunday by default); months and years follow calendar
boundaries, never rolling 30/365-day spans.
"""

from __future__ import annotations

import datetime
from typing import NamedTuple

from .config import SUNDAY
from .operators import FilterOperator


class DateWindow(NamedTuple):
    start: datetime.datetime
    end: datetime.datetime

    def contains(self, value: datetime.datetime) -> bool:
        return self.start <= value < self.end


def _midnight(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min)


def _day(day: datetime.date) -> DateWindow:
    start = _midnight(day)
    return DateWindow(start, start + datetime.timedelta(days=1))


def _week_start(day: datetime.date, week_start: int) -> datetime.date:
    offset = (day.weekday() - week_start) % 7
    return day - datetime.timedelta(days=offset)


def _first_of_month(year: int, month: int) -> datetime.datetime:
    # month may be 0 or 13 when stepping over a year boundary
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime.datetime(year, month, 1)


def today(now: datetime.datetime) -> DateWindow:
    return _day(now.date())


def yesterday(now: datetime.datetime) -> DateWindow:
    return _day(now.date() - datetime.timedelta(days=1))


def this_week(now: datetime.datetime, week_start: int = SUNDAY) -> DateWindow:
    start = _midnight(_week_start(now.date(), week_start))
    return DateWindow(start, start + datetime.timedelta(days=7))


def last_week(now: datetime.datetime, week_start: int = SUNDAY) -> DateWindow:
    current = this_week(now, week_start)
    return DateWindow(current.start - datetime.timedelta(days=7), current.start)


def this_month(now: datetime.datetime) -> DateWindow:
    return DateWindow(
        _first_of_month(now.year, now.month),
        _first_of_month(now.year, now.month + 1),
    )


def last_month(now: datetime.datetime) -> DateWindow:
    return DateWindow(
        _first_of_month(now.year, now.month - 1),
        _first_of_month(now.year, now.month),
    )


def this_year(now: datetime.datetime) -> DateWindow:
    return DateWindow(datetime.datetime(now.year, 1, 1), datetime.datetime(now.year + 1, 1, 1))


def last_year(now: datetime.datetime) -> DateWindow:
    return DateWindow(datetime.datetime(now.year - 1, 1, 1), datetime.datetime(now.year, 1, 1))


def relative_window(
    operator: FilterOperator | str,
    now: datetime.datetime,
    *,
    week_start: int = SUNDAY,
) -> DateWindow:
    """Return the window of a relative-date operator evaluated at *now*."""
    op = FilterOperator(operator)
    if op is FilterOperator.TODAY:
        return today(now)
    if op is FilterOperator.YESTERDAY:
        return yesterday(now)
    if op is FilterOperator.THIS_WEEK:
        return this_week(now, week_start)
    if op is FilterOperator.LAST_WEEK:
        return last_week(now, week_start)
    if op is FilterOperator.THIS_MONTH:
        return this_month(now)
    if op is FilterOperator.LAST_MONTH:
        return last_month(now)
    if op is FilterOperator.THIS_YEAR:
        return this_year(now)
    if op is FilterOperator.LAST_YEAR:
        return last_year(now)
    raise ValueError(f"Not a relative date operator: {operator}")
