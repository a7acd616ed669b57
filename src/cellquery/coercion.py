"""
Value coercion for filter values and generic-slot comparisons.

Pure-Python helpers with no infrastructure dependencies.  Every parser
raises :class:`~cellquery.exceptions.FilterValueError` on input it cannot
convert, which the compiler turns into "drop this filter".
"""

from __future__ import annotations

import datetime
import json
import math
import re
from decimal import Decimal
from typing import Any

from .config import to_naive
from .exceptions import FilterValueError


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

# Plain decimal notation only: no underscores, hex, or "nan"/"inf" spellings.
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_number(value: Any) -> int | float:
    """
    Convert *value* to a finite number.

    Booleans become ``1``/``0``, numeric strings are parsed (surrounding
    whitespace allowed) and integral strings stay ``int``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float | Decimal):
        number = float(value)
        if not math.isfinite(number):
            raise FilterValueError(value, "number", "not a finite number")
        return number
    if isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.match(text):
            raise FilterValueError(value, "number")
        try:
            if re.fullmatch(r"[+-]?\d+", text):
                return int(text)
            number = float(text)
        except (ValueError, OverflowError) as exc:
            # int() refuses very long digit strings
            raise FilterValueError(value, "number", "too large") from exc
        if not math.isfinite(number):
            raise FilterValueError(value, "number", "not a finite number")
        return number
    raise FilterValueError(value, "number", f"unsupported type {type(value).__name__}")


def format_number(value: int | float) -> str:
    """Render a number the way it is stored as text (``5.0`` -> ``"5"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def parse_boolean(value: Any) -> bool:
    """Normalise ``true/false/1/0/yes/no/on/off`` (any case) to ``bool``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    raise FilterValueError(value, "boolean")


def boolean_word(value: Any) -> bool | None:
    """Return the boolean for a search word, ``None`` when it is not one."""
    if not isinstance(value, str):
        return None
    word = value.strip().lower()
    if word in ("true", "yes", "1"):
        return True
    if word in ("false", "no", "0"):
        return False
    return None


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_EPOCH = datetime.date(1970, 1, 1)


def parse_datetime(
    value: Any,
    *,
    tz: datetime.tzinfo | None = None,
    allow_time_only: bool = False,
) -> datetime.datetime:
    """
    Convert *value* to a naive wall-clock ``datetime``.

    Accepts ``datetime``, ``date`` and ISO-8601 strings (a trailing ``Z``
    is read as UTC).  Aware values are converted into *tz* first.  With
    *allow_time_only*, strings such as ``"14:30"`` are anchored to
    1970-01-01.
    """
    if isinstance(value, datetime.datetime):
        try:
            return to_naive(value, tz)
        except OverflowError as exc:
            raise FilterValueError(value, "date", "out of range") from exc
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise FilterValueError(value, "date")
        try:
            return to_naive(datetime.datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
        except OverflowError as exc:
            raise FilterValueError(value, "date", "out of range") from exc
        except ValueError:
            pass
        if allow_time_only:
            try:
                parsed_time = datetime.time.fromisoformat(text)
            except ValueError:
                pass
            else:
                return datetime.datetime.combine(_EPOCH, parsed_time.replace(tzinfo=None))
    raise FilterValueError(value, "date")


_SEARCH_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ][\d:.]+(?:Z|[+-]\d{2}:?\d{2})?)?$")


def parse_search_date(term: str) -> datetime.date | None:
    """Strict ISO date parse used by the global search (``None`` when not a date)."""
    if not _SEARCH_DATE_RE.match(term.strip()):
        return None
    try:
        return parse_datetime(term).date()
    except FilterValueError:
        return None


def start_of_day(value: datetime.datetime) -> datetime.datetime:
    return datetime.datetime.combine(value.date(), datetime.time.min)


def end_of_day(value: datetime.datetime) -> datetime.datetime:
    """Last representable millisecond of *value*'s day (23:59:59.999)."""
    return datetime.datetime.combine(value.date(), datetime.time(23, 59, 59, 999000))


def is_date_only(value: Any) -> bool:
    """True for a ``date`` or an ISO date string without a time part."""
    if isinstance(value, datetime.datetime):
        return False
    if isinstance(value, datetime.date):
        return True
    if isinstance(value, str):
        try:
            datetime.date.fromisoformat(value.strip())
        except ValueError:
            return False
        return True
    return False


def iso_bound(value: datetime.datetime) -> str:
    """
    Render a date bound for comparison with ISO text in the generic slot.

    Midnight renders as a bare date so that date-only strings sort inside
    the day they name.
    """
    if value.time() == datetime.time.min:
        return value.date().isoformat()
    return value.isoformat(timespec="milliseconds")


# ---------------------------------------------------------------------------
# Generic slot
# ---------------------------------------------------------------------------


def to_generic_text(value: Any) -> str | None:
    """Text representation of a generic-slot (JSON) value."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return format_number(value)
    if isinstance(value, datetime.datetime | datetime.date):
        return value.isoformat()
    return json.dumps(value)


def as_reference_list(value: Any) -> list[Any]:
    """Reference cells may hold several ids: single values become ``[value]``."""
    if isinstance(value, list):
        return value
    if isinstance(value, tuple | set):
        return list(value)
    return [value]

