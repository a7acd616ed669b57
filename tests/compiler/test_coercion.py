"""Tests for value coercion helpers."""

from __future__ import annotations

import datetime
import math
import sys

import pytest

from cellquery.coercion import (
    as_reference_list,
    boolean_word,
    end_of_day,
    format_number,
    is_date_only,
    iso_bound,
    parse_boolean,
    parse_datetime,
    parse_number,
    parse_search_date,
    to_generic_text,
)
from cellquery.exceptions import FilterValueError

needs_int_digit_limit = pytest.mark.skipif(
    not getattr(sys, "get_int_max_str_digits", lambda: 0)(), reason="no integer string limit"
)


class TestNumbers:
    def test_integral_strings_stay_int(self) -> None:
        assert parse_number("10") == 10
        assert isinstance(parse_number("10"), int)

    def test_decimal_strings_with_whitespace(self) -> None:
        assert parse_number(" 2.5 ") == 2.5

    def test_bool_is_one_or_zero(self) -> None:
        assert parse_number(True) == 1

    @pytest.mark.parametrize("value", ["abc", "", "nan", "inf", "1_000", "0x10", None, [1]])
    def test_rejects_non_numbers(self, value: object) -> None:
        with pytest.raises(FilterValueError):
            parse_number(value)

    def test_rejects_nan_float(self) -> None:
        with pytest.raises(FilterValueError):
            parse_number(math.nan)

    @needs_int_digit_limit
    def test_overlong_digit_string_is_a_value_error(self) -> None:
        with pytest.raises(FilterValueError, match="too large"):
            parse_number("9" * (sys.get_int_max_str_digits() + 1))

    def test_format_number_drops_trailing_zero(self) -> None:
        assert format_number(5.0) == "5"
        assert format_number(5.25) == "5.25"
        assert format_number(42) == "42"


class TestBooleans:
    @pytest.mark.parametrize("value", [True, "true", "TRUE", "1", "yes", "on", 1])
    def test_true_words(self, value: object) -> None:
        assert parse_boolean(value) is True

    @pytest.mark.parametrize("value", [False, "false", "0", "No", "off", 0])
    def test_false_words(self, value: object) -> None:
        assert parse_boolean(value) is False

    def test_unrecognised_raises(self) -> None:
        with pytest.raises(FilterValueError):
            parse_boolean("maybe")

    def test_search_words_exclude_on_off(self) -> None:
        assert boolean_word("Yes") is True
        assert boolean_word("0") is False
        assert boolean_word("on") is None
        assert boolean_word("42") is None


class TestDates:
    def test_date_string_is_midnight(self) -> None:
        assert parse_datetime("2024-03-05") == datetime.datetime(2024, 3, 5)

    def test_utc_suffix_converted_to_zone(self) -> None:
        parsed = parse_datetime("2024-03-05T10:00:00Z", tz=datetime.timezone.utc)
        assert parsed == datetime.datetime(2024, 3, 5, 10, 0)
        assert parsed.tzinfo is None

    def test_aware_datetime_converted_to_zone(self) -> None:
        plus_two = datetime.timezone(datetime.timedelta(hours=2))
        value = datetime.datetime(2024, 3, 5, 12, 0, tzinfo=plus_two)
        assert parse_datetime(value, tz=datetime.timezone.utc) == datetime.datetime(
            2024, 3, 5, 10, 0
        )

    def test_time_only_anchored_to_epoch(self) -> None:
        assert parse_datetime("14:30", allow_time_only=True) == datetime.datetime(
            1970, 1, 1, 14, 30
        )

    def test_time_only_rejected_by_default(self) -> None:
        with pytest.raises(FilterValueError):
            parse_datetime("14:30")

    def test_zone_shift_past_year_9999_rejected(self) -> None:
        with pytest.raises(FilterValueError, match="out of range"):
            parse_datetime("9999-12-31T23:00:00-05:00", tz=datetime.timezone.utc)

    def test_garbage_rejected(self) -> None:
        with pytest.raises(FilterValueError):
            parse_datetime("next tuesday")

    def test_end_of_day_is_last_millisecond(self) -> None:
        assert end_of_day(datetime.datetime(2024, 3, 5, 8)) == datetime.datetime(
            2024, 3, 5, 23, 59, 59, 999000
        )

    def test_is_date_only(self) -> None:
        assert is_date_only("2024-03-05") is True
        assert is_date_only(datetime.date(2024, 3, 5)) is True
        assert is_date_only("2024-03-05T10:00") is False
        assert is_date_only(datetime.datetime(2024, 3, 5)) is False

    def test_iso_bound(self) -> None:
        assert iso_bound(datetime.datetime(2024, 3, 5)) == "2024-03-05"
        assert iso_bound(datetime.datetime(2024, 3, 5, 23, 59, 59, 999000)) == (
            "2024-03-05T23:59:59.999"
        )

    @pytest.mark.parametrize("term", ["42", "20240305", "2024", "march", "true"])
    def test_search_date_is_strict(self, term: str) -> None:
        assert parse_search_date(term) is None

    def test_search_date_accepts_iso(self) -> None:
        assert parse_search_date("2024-03-05") == datetime.date(2024, 3, 5)
        assert parse_search_date("2024-03-05T10:00:00") == datetime.date(2024, 3, 5)


class TestGenericText:
    def test_scalars(self) -> None:
        assert to_generic_text("abc") == "abc"
        assert to_generic_text(True) == "true"
        assert to_generic_text(5.0) == "5"
        assert to_generic_text(None) is None

    def test_structures_are_json(self) -> None:
        assert to_generic_text(["a", "b"]) == '["a", "b"]'

    def test_reference_list(self) -> None:
        assert as_reference_list(3) == [3]
        assert as_reference_list([3, 4]) == [3, 4]

