from datetime import datetime

import pytest

from tempo_app.analytics.parsing.time_expressions import parse, parse_time, to_duration, to_interval

REF = datetime(2020, 6, 15, 10, 0, 0)


def test_duration_hours_and_minutes():
    result = parse("1h30m", REF)
    assert result.seconds == 5400
    assert result.start_time is None


@pytest.mark.parametrize(
    "expression, seconds",
    [("2h", 7200), ("45m", 2700), ("1h", 3600), ("90m", 5400), ("1h1h", 7200), ("10h5m", 36300)],
)
def test_duration_variants(expression, seconds):
    assert parse(expression, REF).seconds == seconds


def test_zero_duration_parses():
    result = parse("0m", REF)
    assert result is not None
    assert result.seconds == 0


@pytest.mark.parametrize("expression", ["abc", "", "1d", "h", "1h 30m", "1.5h", "30s", None])
def test_rejected_expressions(expression):
    assert parse(expression, REF) is None


def test_interval_with_colons():
    result = parse("11:00-12:30", REF)
    assert result.seconds == 5400
    assert result.start_time == "11:00:00"


@pytest.mark.parametrize(
    "expression, seconds, start",
    [
        ("11-12:30", 5400, "11:00:00"),
        ("9-17", 28800, "09:00:00"),
        ("1100-1230", 5400, "11:00:00"),
        ("930-10", 1800, "09:30:00"),
        ("11.15-12", 2700, "11:15:00"),
    ],
)
def test_interval_shorthand(expression, seconds, start):
    result = parse(expression, REF)
    assert result.seconds == seconds
    assert result.start_time == start


@pytest.mark.parametrize("expression", ["12-11", "12:00-12:00", "25-26", "11:60-12"])
def test_interval_without_positive_span_fails(expression):
    assert parse(expression, REF) is None


def test_parse_time_keeps_reference_day():
    parsed = parse_time("14:05", REF)
    assert parsed == datetime(2020, 6, 15, 14, 5, 0)
    assert parse_time("14:05:30", REF) == datetime(2020, 6, 15, 14, 5, 30)
    assert parse_time("7", REF) == datetime(2020, 6, 15, 7, 0, 0)
    assert parse_time("nope", REF) is None
    assert parse_time(None, REF) is None


def test_to_interval_rebuilds_span():
    interval = to_interval(5400, "11:00:00", REF)
    assert interval.start == datetime(2020, 6, 15, 11, 0)
    assert interval.end == datetime(2020, 6, 15, 12, 30)


def test_to_interval_is_best_effort():
    assert to_interval(5400, None, REF) is None
    assert to_interval(5400, "garbage", REF) is None
    assert to_interval(None, "11:00:00", REF) is None


def test_to_duration_rendering():
    assert to_duration(5400) == "1h30m"
    assert to_duration(7200) == "2h"
    assert to_duration(2700) == "45m"
    assert to_duration(0) == "0m"
    assert to_duration(-1) is None


@pytest.mark.parametrize("seconds", [0, 60, 3600, 5400, 36300, 86400, 123 * 60])
def test_to_duration_round_trip(seconds):
    assert parse(to_duration(seconds), REF).seconds == seconds
