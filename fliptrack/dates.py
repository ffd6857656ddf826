"""
fliptrack.dates
===============

Parsing and display helpers for the dates and timestamps that flow in
from the stores.  Display helpers never raise: a missing value renders as
``"N/A"`` and an unparseable one as ``"Invalid Date"``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]

NOT_AVAILABLE = "N/A"
INVALID_DATE = "Invalid Date"


def parse_timestamp(value: DateLike) -> Optional[datetime]:
    """
    Coerce *value* into a :class:`datetime`, or ``None`` if impossible.

    Accepts datetimes, plain dates (midnight) and ISO‑8601 strings,
    including the ``Z`` UTC suffix browsers emit.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def days_between(start: datetime, end: datetime) -> int:
    """
    Calendar days from *start* to *end*.

    Both values are compared in *end*'s timezone; a naive value is taken
    to already be in that zone.  Time of day is ignored.
    """
    if start.tzinfo is not None and end.tzinfo is not None:
        start = start.astimezone(end.tzinfo)
    return (end.date() - start.date()).days


def format_date(value: DateLike) -> str:
    """``Jan 05, 2024``"""
    if value is None or value == "":
        return NOT_AVAILABLE
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%b %d, %Y")


def format_datetime(value: DateLike) -> str:
    """``Jan 05, 2024 3:07 PM``"""
    if value is None or value == "":
        return NOT_AVAILABLE
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    hour = parsed.hour % 12 or 12
    return f"{parsed.strftime('%b %d, %Y')} {hour}:{parsed.minute:02d} {parsed.strftime('%p')}"
