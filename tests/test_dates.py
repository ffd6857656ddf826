"""
tests/test_dates.py
===================

Unit tests for the parsing / display helpers in fliptrack.dates
"""

from datetime import date, datetime, timedelta, timezone

from fliptrack.dates import (
    INVALID_DATE,
    NOT_AVAILABLE,
    days_between,
    format_date,
    format_datetime,
    parse_timestamp,
)


def test_parse_accepts_common_shapes():
    assert parse_timestamp(datetime(2024, 1, 5, 8)) == datetime(2024, 1, 5, 8)
    assert parse_timestamp(date(2024, 1, 5)) == datetime(2024, 1, 5)
    assert parse_timestamp("2024-01-05") == datetime(2024, 1, 5)
    assert parse_timestamp("2024-01-05T08:00:00Z") == datetime(2024, 1, 5, 8, tzinfo=timezone.utc)


def test_parse_rejects_garbage():
    assert parse_timestamp(None) is None
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(12345) is None


def test_days_between_uses_calendar_dates():
    assert days_between(datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0)) == 1
    assert days_between(datetime(2024, 1, 1, 1, 0), datetime(2024, 1, 1, 23, 0)) == 0


def test_days_between_converts_aware_values():
    plus_ten = timezone(timedelta(hours=10))
    start = datetime(2024, 1, 2, 5, 0, tzinfo=plus_ten)   # Jan 1 19:00 UTC
    end = datetime(2024, 1, 2, 1, 0, tzinfo=timezone.utc)
    assert days_between(start, end) == 1


def test_format_date():
    assert format_date("2024-01-05") == "Jan 05, 2024"
    assert format_date(date(2024, 12, 25)) == "Dec 25, 2024"
    assert format_date(None) == NOT_AVAILABLE
    assert format_date("") == NOT_AVAILABLE
    assert format_date("31/31/2024") == INVALID_DATE


def test_format_datetime():
    assert format_datetime(datetime(2024, 1, 5, 15, 7)) == "Jan 05, 2024 3:07 PM"
    assert format_datetime(datetime(2024, 1, 5, 0, 30)) == "Jan 05, 2024 12:30 AM"
    assert format_datetime(None) == NOT_AVAILABLE
    assert format_datetime("nope") == INVALID_DATE
