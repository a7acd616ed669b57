"""
Global search: one free-text term matched against every cell of a row.

The term always matches the string slot (case-insensitive substring) and
the generic slot (substring).  Number, date and boolean branches are
added only when the term parses as that type, so ``"42"`` searches text,
numbers and generic values but not dates or booleans.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from .coercion import boolean_word, parse_number, parse_search_date
from .exceptions import FilterValueError
from .operators import CellSlot, SlotOperator
from .predicates import CellPredicate, all_of, any_of, slot

if TYPE_CHECKING:
    from .config import CompilerConfig
    from .predicates import Predicate


def normalize_search_term(term: str | None, min_length: int = 1) -> str | None:
    """Trim *term*; return ``None`` when it is blank or too short."""
    if term is None:
        return None
    text = term.strip()
    if len(text) < min_length:
        return None
    return text


def build_search_predicate(
    term: str | None,
    config: CompilerConfig | None = None,
) -> Predicate | None:
    """Compile *term* into an any-cell predicate, or ``None`` for no search."""
    text = normalize_search_term(term, config.search_min_length if config else 1)
    if text is None:
        return None

    branches: list[Predicate] = [slot(CellSlot.STRING, SlotOperator.ICONTAINS, text)]

    try:
        number = parse_number(text)
    except FilterValueError:
        pass
    else:
        branches.append(slot(CellSlot.NUMBER, SlotOperator.EQ, number))

    day = parse_search_date(text)
    if day is not None:
        branches.append(_day_branch(day))

    flag = boolean_word(text)
    if flag is not None:
        branches.append(slot(CellSlot.BOOLEAN, SlotOperator.EQ, flag))

    branches.append(slot(CellSlot.GENERIC, SlotOperator.CONTAINS, text))
    return CellPredicate(None, any_of(*branches))


def _day_branch(day: datetime.date) -> Predicate:
    start = datetime.datetime.combine(day, datetime.time.min)
    try:
        end = start + datetime.timedelta(days=1)
    except OverflowError:
        # Last representable day: no upper bound.
        return slot(CellSlot.DATE, SlotOperator.GE, start)
    return all_of(
        slot(CellSlot.DATE, SlotOperator.GE, start),
        slot(CellSlot.DATE, SlotOperator.LT, end),
    )
