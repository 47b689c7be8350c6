"""Calendar primitives shared by the deadline engine.

All functions work on plain ``datetime.date`` values. A ``datetime`` passed in
is reduced to its calendar date; time-of-day never participates in any rule.

Business days here are Monday-Friday. Federal holidays are NOT skipped by
``subtract_business_days`` (see holidays.py for check-date validation).
"""

import re
from datetime import date, datetime, timedelta
from typing import Union

DATE_FMT = "%Y-%m-%d"

# Saturday/Sunday in date.weekday() numbering (Monday == 0)
SATURDAY = 5
SUNDAY = 6

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = Union[str, date, datetime]


class InvalidDateFormat(ValueError):
    """Raised when a date string is not a valid yyyy-MM-dd calendar date."""

    def __init__(self, value, reason: str = "expected yyyy-MM-dd"):
        self.value = value
        super().__init__(f"Invalid date {value!r}: {reason}")


def parse_date(value: DateLike) -> date:
    """Parse a yyyy-MM-dd string (or pass through a date) to a date.

    Unlike lenient parsers, single-digit months/days, trailing time parts
    and impossible dates (2025-02-30) are all rejected.

    Raises:
        InvalidDateFormat: If the value cannot be read as a calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateFormat(value, f"unsupported type {type(value).__name__}")

    text = value.strip()
    if not _ISO_DATE_RE.match(text):
        raise InvalidDateFormat(value)
    try:
        return datetime.strptime(text, DATE_FMT).date()
    except ValueError as e:
        raise InvalidDateFormat(value, str(e)) from e


def format_date(d: date) -> str:
    """Format a date as yyyy-MM-dd."""
    return d.strftime(DATE_FMT)


def clamp_to_midnight(d: Union[date, datetime]) -> date:
    """Return the calendar date of ``d`` with any time component dropped."""
    return date(d.year, d.month, d.day)


def is_weekend(d: date) -> bool:
    """True for Saturday and Sunday."""
    return d.weekday() in (SATURDAY, SUNDAY)


def subtract_business_days(d: Union[date, datetime], business_days: int) -> date:
    """Walk back ``business_days`` weekdays from ``d``.

    The starting date is never counted; the first step always moves to the
    previous calendar day. ``business_days == 0`` returns ``d`` unchanged.
    """
    current = clamp_to_midnight(d)
    remaining = business_days
    while remaining > 0:
        current -= timedelta(days=1)
        if not is_weekend(current):
            remaining -= 1
    return current


def days_between(start: date, end: date) -> int:
    """Signed calendar-day difference ``end - start``."""
    return (end - start).days
