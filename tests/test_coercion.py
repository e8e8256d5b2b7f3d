"""
Tests for the text-field parsing helpers.
File: tests/test_coercion.py
"""

from datetime import date

import pandas as pd
import pytest

from ride_recap.pipeline.coercion import (
    first_present,
    is_truthy,
    is_valid,
    parse_amount,
    parse_amount_or_none,
    parse_quantity,
    parse_timestamp,
    time_of_day,
    to_fixed,
    weekday_slot,
)


class TestParseAmount:
    """Numeric fields never raise and fall back to 0."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("10.00", 10.0),
            ("  7.5 ", 7.5),
            ("12.5 USD", 12.5),
            ("-3", -3.0),
            (".5", 0.5),
            ("1e2", 100.0),
        ],
    )
    def test_parses_leading_number(self, text, expected):
        assert parse_amount(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", None, "abc", "$5.00", "NaN", "inf"])
    def test_unparseable_is_zero(self, text):
        assert parse_amount(text) == 0.0
        assert parse_amount_or_none(text) is None


def test_parse_quantity_defaults_to_one():
    assert parse_quantity("3") == 3
    assert parse_quantity("2.0") == 2
    assert parse_quantity("") == 1
    assert parse_quantity(None) == 1
    assert parse_quantity("two") == 1


def test_is_truthy():
    assert is_truthy("true")
    assert is_truthy(" true ")
    assert is_truthy(True)
    assert not is_truthy("1")
    assert not is_truthy("yes")
    assert not is_truthy("false")
    assert not is_truthy("")
    assert not is_truthy(None)


def test_first_present_skips_empty_values():
    record = {"a": "", "b": "  ", "c": "x"}
    assert first_present(record, "a", "b", "c") == "x"
    assert first_present(record, "missing", "a") == ""


class TestParseTimestamp:
    def test_naive_timestamp_is_kept_as_local(self):
        ts = parse_timestamp("2024-01-07 08:30:00")
        assert is_valid(ts)
        assert ts.year == 2024
        assert ts.hour == 8
        assert ts.date() == date(2024, 1, 7)

    def test_export_style_utc_suffix(self):
        ts = parse_timestamp("2024-03-10 12:00:00 +0000 UTC")
        assert is_valid(ts)
        assert ts.tzinfo is None
        assert ts.year == 2024

    @pytest.mark.parametrize("text", ["", None, "not a date", "2024-02-30 10:00:00"])
    def test_invalid_returns_nat(self, text):
        ts = parse_timestamp(text)
        assert ts is pd.NaT
        assert not is_valid(ts)


@pytest.mark.parametrize(
    "hour, bucket",
    [
        (0, "night"),
        (4, "night"),
        (5, "morning"),
        (11, "morning"),
        (12, "afternoon"),
        (16, "afternoon"),
        (17, "evening"),
        (20, "evening"),
        (21, "night"),
        (23, "night"),
    ],
)
def test_time_of_day_boundaries(hour, bucket):
    assert time_of_day(hour) == bucket


def test_weekday_slot_starts_on_sunday():
    assert weekday_slot(pd.Timestamp("2024-01-07")) == 0  # Sunday
    assert weekday_slot(pd.Timestamp("2024-01-08")) == 1  # Monday
    assert weekday_slot(pd.Timestamp("2024-01-13")) == 6  # Saturday


@pytest.mark.parametrize(
    "text",
    [
        "2023-05-01 08:34:56 -0400 EDT",
        "2023-05-01 08:34:56 +0530 IST",
        "2023-05-01 08:34:56 +0000 GMT",
    ],
)
def test_zone_label_after_offset_is_ignored(text):
    ts = parse_timestamp(text)
    assert is_valid(ts)
    assert ts.tzinfo is None
    assert ts.year == 2023
    assert ts.month == 5


class TestToFixed:
    """Exact ties round up, like the JS toFixed the front-end was built on."""

    @pytest.mark.parametrize(
        "value, digits, expected",
        [
            (0.25, 1, "0.3"),
            (900 / 3600, 1, "0.3"),
            (1.125, 2, "1.13"),
            (0.125, 2, "0.13"),
            (0.0, 2, "0.00"),
            (21, 2, "21.00"),
            (1.75, 2, "1.75"),
            (1.005, 2, "1.00"),  # 1.005 is really 1.00499999...
        ],
    )
    def test_rounding(self, value, digits, expected):
        assert to_fixed(value, digits) == expected
