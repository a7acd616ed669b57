"""End-to-end tests: filters compiled by FilterCompiler, evaluated in memory."""

from __future__ import annotations

import datetime
import logging
import sys

import pytest

from cellquery import (
    AndPredicate,
    CellPredicate,
    CellSlot,
    CompilerConfig,
    EmptyPolicy,
    FilterCompiler,
    FilterSpec,
    OrPredicate,
    SlotOperator,
    SlotPredicate,
    TablePredicate,
    compile_filters,
)

TABLE_ID = 7
FIXED_NOW = datetime.datetime(2024, 3, 20, 10, 30)
TITLE, AMOUNT, DUE, ACTIVE, OWNER, STATUS, META, STARTED, OPENS = range(1, 10)

needs_int_digit_limit = pytest.mark.skipif(
    not getattr(sys, "get_int_max_str_digits", lambda: 0)(), reason="no integer string limit"
)


def matching_ids(evaluator, compiled, rows) -> list[int]:
    return [row.id for row in evaluator.filter(compiled.predicate, rows)]


class TestCompiledShape:
    def test_no_filters_is_table_scope_only(self, compiler) -> None:
        compiled = compiler.compile([])
        assert compiled.predicate == TablePredicate(TABLE_ID)
        assert compiled.has_filters is False
        assert compiled.applied == []
        assert compiled.dropped == []

    def test_none_filters_and_blank_search(self, compiler) -> None:
        compiled = compiler.compile(None, search="   ")
        assert compiled.predicate == TablePredicate(TABLE_ID)
        assert compiled.search is None

    def test_table_scope_comes_first(self, compiler) -> None:
        compiled = compiler.compile(
            [{"columnId": TITLE, "operator": "contains", "value": "report"}]
        )
        assert isinstance(compiled.predicate, AndPredicate)
        table, cell = compiled.predicate.conditions
        assert table == TablePredicate(TABLE_ID)
        assert isinstance(cell, CellPredicate)
        assert cell.column_id == TITLE
        assert compiled.has_filters is True

    def test_search_precedes_filters(self, compiler) -> None:
        compiled = compiler.compile(
            [{"columnId": AMOUNT, "operator": "equals", "value": 5}], search="  report "
        )
        _, search, cell = compiled.predicate.conditions  # type: ignore[union-attr]
        assert search.column_id is None
        assert cell.column_id == AMOUNT
        assert compiled.search == "report"

    def test_compiling_twice_gives_equal_trees(self, compiler) -> None:
        filters = [
            {"columnId": DUE, "operator": "this_week"},
            {"columnId": AMOUNT, "operator": "between", "value": 1, "secondValue": 9},
        ]
        assert compiler.compile(filters, "x").predicate == compiler.compile(filters, "x").predicate

    def test_column_type_is_filled_from_column(self, compiler) -> None:
        compiled = compiler.compile([FilterSpec(column_id=AMOUNT, operator="equals", value=5)])
        assert compiled.applied[0].column_type == "number"

    def test_shortcut(self, columns, config) -> None:
        compiled = compile_filters(
            TABLE_ID, columns, [{"columnId": TITLE, "operator": "is_empty"}], config=config
        )
        assert compiled.has_filters is True

    def test_columns_may_be_plain_dicts(self, config) -> None:
        compiler = FilterCompiler(TABLE_ID, [{"id": 1, "name": "n", "type": "number"}], config)
        compiled = compiler.compile([{"columnId": 1, "operator": "greater_than", "value": "3"}])
        assert compiled.has_filters is True


class TestDroppedFilters:
    def test_invalid_filters_are_dropped_and_the_rest_applied(self, compiler) -> None:
        compiled = compiler.compile(
            [
                {"columnId": TITLE, "operator": "contains", "value": "a"},
                {"columnId": 999, "operator": "equals", "value": "x"},
                {"columnId": AMOUNT, "operator": "equals", "value": ""},
                {"columnId": ACTIVE, "operator": "greater_than", "value": True},
                {"columnId": AMOUNT, "operator": "less_than", "value": 3},
            ]
        )
        assert len(compiled.applied) == 2
        assert len(compiled.dropped) == 3
        assert len(compiled.predicate.conditions) == 3  # type: ignore[union-attr]
        reasons = [d.reason for d in compiled.dropped]
        assert reasons[0] == "Column with ID 999 not found"
        assert reasons[1] == "Operator 'equals' requires a value"
        assert reasons[2].startswith("Operator 'greater_than' is not compatible")

    def test_incompatible_operator_only_leaves_table_scope(self, compiler) -> None:
        compiled = compiler.compile([{"columnId": ACTIVE, "operator": "greater_than", "value": 1}])
        assert compiled.predicate == TablePredicate(TABLE_ID)
        assert compiled.has_filters is False

    def test_unknown_operator_is_dropped(self, compiler) -> None:
        compiled = compiler.compile([{"columnId": TITLE, "operator": "fuzzy", "value": "a"}])
        assert compiled.has_filters is False
        assert len(compiled.dropped) == 1

    def test_malformed_dict_is_dropped(self, compiler) -> None:
        compiled = compiler.compile([{"operator": "equals", "value": 1}])
        assert compiled.dropped[0].reason.startswith("Malformed filter")

    def test_non_numeric_value_is_dropped(self, compiler) -> None:
        compiled = compiler.compile([{"columnId": AMOUNT, "operator": "equals", "value": "NaN"}])
        assert compiled.has_filters is False
        assert "Cannot convert" in compiled.dropped[0].reason

    @needs_int_digit_limit
    def test_oversized_integer_is_dropped(self, compiler) -> None:
        compiled = compiler.compile(
            [
                {"columnId": AMOUNT, "operator": "equals", "value": "1" * 5000},
                {"columnId": TITLE, "operator": "contains", "value": "report"},
            ]
        )
        assert [f.column_id for f in compiled.applied] == [TITLE]
        assert "Cannot convert" in compiled.dropped[0].reason

    def test_date_beyond_calendar_after_zone_shift_is_dropped(self, columns) -> None:
        config = CompilerConfig(clock=lambda: FIXED_NOW, timezone=datetime.timezone.utc)
        compiled = FilterCompiler(TABLE_ID, columns, config).compile(
            [{"columnId": STARTED, "operator": "equals", "value": "9999-12-31T23:00:00-05:00"}]
        )
        assert compiled.has_filters is False
        assert "out of range" in compiled.dropped[0].reason

    def test_range_without_second_value_is_dropped(self, compiler) -> None:
        compiled = compiler.compile([{"columnId": AMOUNT, "operator": "between", "value": 1}])
        assert compiled.dropped[0].reason == "Range operator 'between' requires secondValue"

    def test_drop_is_logged(self, compiler, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="cellquery.compiler"):
            compiler.compile([{"columnId": 999, "operator": "equals", "value": 1}])
        records = [r for r in caplog.records if r.name == "cellquery.compiler"]
        assert records
        assert records[0].levelno == logging.WARNING
        assert "Dropping filter" in records[0].getMessage()


class TestTextFilters:
    def test_contains(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {TITLE: {"string_value": "Quarterly Report"}}),
            make_row(2, {TITLE: {"string_value": "Invoice"}}),
            make_row(3, {TITLE: {"value": "old report"}}),
            make_row(4, {TITLE: {"value": "Old Report"}}),
            make_row(5, {AMOUNT: {"string_value": "report"}}),
        ]
        compiled = compiler.compile([{"columnId": TITLE, "operator": "contains", "value": "report"}])
        assert matching_ids(evaluator, compiled, rows) == [1, 3]

    def test_other_tables_never_match(self, compiler, evaluator, make_row) -> None:
        rows = [make_row(1, {TITLE: {"string_value": "report"}}, table_id=8)]
        compiled = compiler.compile([{"columnId": TITLE, "operator": "contains", "value": "report"}])
        assert matching_ids(evaluator, compiled, rows) == []


class TestNumericFilters:
    @pytest.fixture
    def rows(self, make_row):
        return [make_row(n, {AMOUNT: {"number_value": n}}) for n in (9, 10, 15, 20, 21)]

    def test_between_is_inclusive(self, compiler, evaluator, rows) -> None:
        compiled = compiler.compile(
            [{"columnId": AMOUNT, "operator": "between", "value": 10, "secondValue": 20}]
        )
        assert matching_ids(evaluator, compiled, rows) == [10, 15, 20]

    def test_not_between_is_the_complement(self, compiler, evaluator, rows) -> None:
        compiled = compiler.compile(
            [{"columnId": AMOUNT, "operator": "not_between", "value": "10", "secondValue": "20"}]
        )
        assert matching_ids(evaluator, compiled, rows) == [9, 21]

    def test_equals_reads_typed_then_generic_slot(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {AMOUNT: {"number_value": 5}}),
            make_row(2, {AMOUNT: {"value": "5"}}),
            make_row(3, {AMOUNT: {"value": 5}}),
            make_row(4, {AMOUNT: {"number_value": 7, "value": "5"}}),
            make_row(5, {AMOUNT: {}}),
        ]
        for value in (5, "5", 5.0):
            compiled = compiler.compile([{"columnId": AMOUNT, "operator": "equals", "value": value}])
            assert matching_ids(evaluator, compiled, rows) == [1, 2, 3]


class TestTemporalFilters:
    def test_this_month(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {DUE: {"date_value": datetime.datetime(2024, 3, 1)}}),
            make_row(2, {DUE: {"date_value": datetime.datetime(2024, 3, 31, 23, 59)}}),
            make_row(3, {DUE: {"date_value": datetime.datetime(2024, 4, 1)}}),
            make_row(4, {DUE: {"date_value": datetime.datetime(2024, 2, 29, 12)}}),
            make_row(5, {DUE: {"value": "2024-03-15"}}),
        ]
        compiled = compiler.compile([{"columnId": DUE, "operator": "this_month"}])
        assert matching_ids(evaluator, compiled, rows) == [1, 2, 5]

    def test_equals_matches_whole_day(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {DUE: {"date_value": datetime.datetime(2024, 3, 5)}}),
            make_row(2, {DUE: {"date_value": datetime.datetime(2024, 3, 5, 23, 59, 59)}}),
            make_row(3, {DUE: {"date_value": datetime.datetime(2024, 3, 6)}}),
            make_row(4, {DUE: {"value": "2024-03-05T10:00:00"}}),
            make_row(5, {DUE: {"date_value": datetime.date(2024, 3, 5)}}),
        ]
        compiled = compiler.compile([{"columnId": DUE, "operator": "equals", "value": "2024-03-05"}])
        assert matching_ids(evaluator, compiled, rows) == [1, 2, 4, 5]

    def test_between_dates_includes_last_day(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {STARTED: {"date_value": datetime.datetime(2024, 3, 5, 18)}}),
            make_row(2, {STARTED: {"date_value": datetime.datetime(2024, 3, 6)}}),
        ]
        compiled = compiler.compile(
            [
                {
                    "columnId": STARTED,
                    "operator": "between",
                    "value": "2024-03-01",
                    "secondValue": "2024-03-05",
                }
            ]
        )
        assert matching_ids(evaluator, compiled, rows) == [1]

    def test_time_equals_is_exact(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {OPENS: {"date_value": datetime.datetime(1970, 1, 1, 14, 30)}}),
            make_row(2, {OPENS: {"date_value": datetime.datetime(1970, 1, 1, 9, 0)}}),
        ]
        compiled = compiler.compile([{"columnId": OPENS, "operator": "equals", "value": "14:30"}])
        assert matching_ids(evaluator, compiled, rows) == [1]

    def test_relative_filters_share_one_clock_reading(self, columns) -> None:
        calls = []

        def clock() -> datetime.datetime:
            calls.append(1)
            return datetime.datetime(2024, 3, 20)

        compiler = FilterCompiler(TABLE_ID, columns, CompilerConfig(clock=clock))
        compiler.compile(
            [{"columnId": DUE, "operator": "today"}, {"columnId": STARTED, "operator": "this_year"}]
        )
        assert len(calls) == 1


class TestOtherFilters:
    def test_boolean_words(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {ACTIVE: {"boolean_value": True}}),
            make_row(2, {ACTIVE: {"boolean_value": False}}),
            make_row(3, {ACTIVE: {"value": "true"}}),
            make_row(4, {ACTIVE: {"value": True}}),
        ]
        compiled = compiler.compile([{"columnId": ACTIVE, "operator": "equals", "value": "yes"}])
        assert matching_ids(evaluator, compiled, rows) == [1, 3, 4]

    def test_reference_single_id(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(1, {OWNER: {"value": [12]}}),
            make_row(2, {OWNER: {"value": [12, 13]}}),
        ]
        compiled = compiler.compile([{"columnId": OWNER, "operator": "equals", "value": 12}])
        assert matching_ids(evaluator, compiled, rows) == [1]

    def test_enumeration_is_case_sensitive(self, compiler, evaluator, make_row) -> None:
        rows = [make_row(1, {STATUS: {"value": "Open"}}), make_row(2, {STATUS: {"value": "open"}})]
        compiled = compiler.compile([{"columnId": STATUS, "operator": "equals", "value": "Open"}])
        assert matching_ids(evaluator, compiled, rows) == [1]

    def test_json_regex_is_substring(self, compiler, evaluator, make_row) -> None:
        rows = [make_row(1, {META: {"value": "abc-123"}}), make_row(2, {META: {"value": "xyz"}})]
        compiled = compiler.compile([{"columnId": META, "operator": "regex", "value": "c-1"}])
        assert matching_ids(evaluator, compiled, rows) == [1]


class TestEmptinessFilters:
    @pytest.fixture
    def rows(self, make_row):
        full = {
            "string_value": "a",
            "number_value": 1,
            "date_value": datetime.datetime(2024, 1, 1),
            "boolean_value": True,
            "value": "a",
        }
        return [
            make_row(1, {TITLE: {}}),
            make_row(2, {TITLE: {"string_value": "a"}}),
            make_row(3, {TITLE: full}),
        ]

    def test_strict_policy(self, compiler, evaluator, rows) -> None:
        empty = compiler.compile([{"columnId": TITLE, "operator": "is_empty"}])
        not_empty = compiler.compile([{"columnId": TITLE, "operator": "is_not_empty"}])
        assert matching_ids(evaluator, empty, rows) == [1]
        assert matching_ids(evaluator, not_empty, rows) == [3]

    def test_any_slot_policy(self, columns, evaluator, rows) -> None:
        compiler = FilterCompiler(
            TABLE_ID, columns, CompilerConfig(empty_policy=EmptyPolicy.ANY_SLOT)
        )
        empty = compiler.compile([{"columnId": TITLE, "operator": "is_empty"}])
        not_empty = compiler.compile([{"columnId": TITLE, "operator": "is_not_empty"}])
        assert matching_ids(evaluator, empty, rows) == [1]
        assert matching_ids(evaluator, not_empty, rows) == [2, 3]

    def test_never_both(self, compiler, evaluator, rows) -> None:
        empty = compiler.compile([{"columnId": TITLE, "operator": "is_empty"}])
        not_empty = compiler.compile([{"columnId": TITLE, "operator": "is_not_empty"}])
        both = set(matching_ids(evaluator, empty, rows)) & set(
            matching_ids(evaluator, not_empty, rows)
        )
        assert both == set()


class TestGlobalSearch:
    def search_branches(self, compiler, term: str):
        compiled = compiler.compile([], search=term)
        search = compiled.predicate.conditions[1]  # type: ignore[union-attr]
        assert isinstance(search, CellPredicate)
        assert search.column_id is None
        assert isinstance(search.condition, OrPredicate)
        return search.condition.conditions

    def test_number_term(self, compiler) -> None:
        branches = self.search_branches(compiler, "42")
        assert [b.slot for b in branches] == [CellSlot.STRING, CellSlot.NUMBER, CellSlot.GENERIC]
        assert branches[1].op is SlotOperator.EQ
        assert branches[1].value == 42

    def test_boolean_term(self, compiler) -> None:
        branches = self.search_branches(compiler, "true")
        assert [b.slot for b in branches] == [CellSlot.STRING, CellSlot.BOOLEAN, CellSlot.GENERIC]

    def test_date_term(self, compiler) -> None:
        branches = self.search_branches(compiler, "2024-03-05")
        assert len(branches) == 3
        assert isinstance(branches[1], AndPredicate)

    def test_last_calendar_day_has_open_upper_bound(self, compiler) -> None:
        branches = self.search_branches(compiler, "9999-12-31")
        assert branches[1] == SlotPredicate(
            CellSlot.DATE, SlotOperator.GE, datetime.datetime(9999, 12, 31)
        )

    @needs_int_digit_limit
    def test_oversized_number_term_searches_text_only(self, compiler) -> None:
        branches = self.search_branches(compiler, "1" * 5000)
        assert [b.slot for b in branches] == [CellSlot.STRING, CellSlot.GENERIC]

    def test_plain_term(self, compiler) -> None:
        branches = self.search_branches(compiler, "report")
        assert [b.op for b in branches] == [SlotOperator.ICONTAINS, SlotOperator.CONTAINS]

    def test_search_matches_any_cell(self, compiler, evaluator, make_row) -> None:
        rows = [
            make_row(
                1,
                {
                    TITLE: {"string_value": "x"},
                    DUE: {"date_value": datetime.datetime(2024, 3, 5, 14)},
                },
            ),
            make_row(2, {TITLE: {"string_value": "2024-03-05 notes"}}),
            make_row(3, {TITLE: {"string_value": "nothing"}}),
        ]
        compiled = compiler.compile([], search="2024-03-05")
        assert matching_ids(evaluator, compiled, rows) == [1, 2]

    def test_minimum_length(self, columns) -> None:
        compiler = FilterCompiler(TABLE_ID, columns, CompilerConfig(search_min_length=3))
        assert compiler.compile([], search="ab").has_filters is False
        assert compiler.compile([], search="abc").has_filters is True
