from __future__ import annotations

import math
from datetime import date, datetime

import numpy as np
import pytest

from sheet_analyzer.models.column import Column, ColumnType
from sheet_analyzer.services.inference import (
    infer_column_type,
    infer_columns,
    is_date_value,
    parse_number,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (10, 10.0),
        (2.5, 2.5),
        ("42", 42.0),
        ("  -1.5 ", -1.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("+2E-1", 0.2),
        (True, 1.0),
        (False, 0.0),
        (np.int64(7), 7.0),
    ],
)
def test_parse_number_accepts_numeric_literals(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "12abc", "1,000", "--1", float("nan"), date(2024, 1, 1)])
def test_parse_number_rejects_non_numeric(value):
    assert parse_number(value) is None


def test_parse_number_infinity_literal():
    assert parse_number("Infinity") == math.inf
    assert parse_number("-Infinity") == -math.inf


def test_is_date_value():
    assert is_date_value(datetime(2024, 3, 1, 12, 0))
    assert is_date_value(date(2024, 3, 1))
    assert is_date_value("2024-03-01")
    assert not is_date_value("apple")
    assert not is_date_value("")
    assert not is_date_value(None)
    assert not is_date_value(20240301)


def test_numeric_column():
    assert infer_column_type([1, 2.5, "3", None, ""]) is ColumnType.NUMBER


def test_date_column():
    assert infer_column_type(["2024-01-01", datetime(2024, 2, 1), None]) is ColumnType.DATE


def test_string_column():
    assert infer_column_type(["apple", "pear"]) is ColumnType.STRING


@pytest.mark.parametrize("values", [["today", "now"], ["May", "June"], ["yesterday"]])
def test_words_pandas_reads_as_dates_stay_strings(values):
    assert infer_column_type(values) is ColumnType.STRING


def test_month_name_with_year_is_date():
    assert is_date_value("May 2024")


def test_empty_column_is_number():
    # every() over no values is true
    assert infer_column_type([]) is ColumnType.NUMBER
    assert infer_column_type([None, None, ""]) is ColumnType.NUMBER


def test_numeric_check_wins_over_date_check():
    # 2024 is also a valid year for a date parser
    assert infer_column_type(["2024", "2023"]) is ColumnType.NUMBER


def test_single_non_conforming_value_demotes_column():
    assert infer_column_type([1, 2, "apple"]) is ColumnType.STRING
    assert infer_column_type(["2024-01-01", "apple"]) is ColumnType.STRING


def test_mixed_numbers_and_dates_is_string():
    assert infer_column_type([1, "2024-01-01"]) is ColumnType.STRING


def test_infer_columns_follows_header_order():
    rows = [
        {"Region": "East", "Sales": 10, "Day": "2024-01-01"},
        {"Region": "West", "Sales": None, "Day": "2024-01-02"},
    ]
    assert infer_columns(["Sales", "Region", "Day"], rows) == [
        Column("Sales", ColumnType.NUMBER),
        Column("Region", ColumnType.STRING),
        Column("Day", ColumnType.DATE),
    ]


def test_infer_columns_missing_column_is_number():
    assert infer_columns(["Ghost"], [{"A": 1}]) == [Column("Ghost", ColumnType.NUMBER)]
