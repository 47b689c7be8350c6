"""US federal holiday calculation.

Computes the observed dates of the 11 federal holidays for a year. Fixed-date
holidays falling on a weekend are observed on the nearest weekday:

- Saturday -> preceding Friday
- Sunday -> following Monday

Weekday-rule holidays (3rd Monday, last Monday, ...) never need shifting.

Note: New Year's Day on a Saturday is observed on Dec 31 of the prior year.
That date belongs to the set of the holiday's own year, so a lookup for
Dec 31 checks the Dec 31 year's set and does not see it.

Usage:
    from paycal.sdk.holidays import HolidayCache, is_federal_holiday_observed

    cache = HolidayCache()
    is_federal_holiday_observed(date(2025, 7, 4), cache)  # True
"""

from calendar import monthrange
from datetime import date, timedelta
from typing import Dict, Optional, Set

from .dates import SATURDAY, SUNDAY, format_date

MONDAY = 0
THURSDAY = 3


def observed_date(d: date) -> date:
    """Shift a fixed-date holiday off the weekend."""
    if d.weekday() == SATURDAY:
        return d - timedelta(days=1)
    if d.weekday() == SUNDAY:
        return d + timedelta(days=1)
    return d


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """Return the n-th (1-indexed) ``weekday`` of a month.

    Args:
        year: Calendar year
        month: Month, 1-12
        weekday: date.weekday() value (Monday == 0)
        n: Occurrence, 1 for the first
    """
    first = date(year, month, 1)
    offset = (7 + weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Return the last ``weekday`` of a month, walking back from month end."""
    last = date(year, month, monthrange(year, month)[1])
    offset = (7 + last.weekday() - weekday) % 7
    return last - timedelta(days=offset)


def federal_holidays(year: int) -> Dict[str, date]:
    """Observed federal holidays for a year, in calendar order, keyed by name."""
    return {
        "New Year's Day": observed_date(date(year, 1, 1)),
        "Martin Luther King Jr. Day": nth_weekday_of_month(year, 1, MONDAY, 3),
        "Presidents' Day": nth_weekday_of_month(year, 2, MONDAY, 3),
        "Memorial Day": last_weekday_of_month(year, 5, MONDAY),
        "Juneteenth": observed_date(date(year, 6, 19)),
        "Independence Day": observed_date(date(year, 7, 4)),
        "Labor Day": nth_weekday_of_month(year, 9, MONDAY, 1),
        "Columbus Day": nth_weekday_of_month(year, 10, MONDAY, 2),
        "Veterans Day": observed_date(date(year, 11, 11)),
        "Thanksgiving": nth_weekday_of_month(year, 11, THURSDAY, 4),
        "Christmas Day": observed_date(date(year, 12, 25)),
    }


def us_federal_holidays_observed(year: int) -> Set[str]:
    """Observed federal holidays for a year as a set of ISO date strings."""
    return {format_date(d) for d in federal_holidays(year).values()}


class HolidayCache:
    """Per-year holiday sets, computed on first use.

    Owned by the caller; pass the same instance to repeated lookups to avoid
    recomputing a year's set.
    """

    def __init__(self):
        self._years: Dict[int, Set[str]] = {}

    def for_year(self, year: int) -> Set[str]:
        """Observed holiday ISO dates for ``year``, computed on first use."""
        if year not in self._years:
            self._years[year] = us_federal_holidays_observed(year)
        return self._years[year]

    def __contains__(self, year: int) -> bool:
        return year in self._years

    def __len__(self) -> int:
        return len(self._years)


def is_federal_holiday_observed(d: date, cache: Optional[HolidayCache] = None) -> bool:
    """True if ``d`` is an observed federal holiday of ``d.year``.

    Without a cache the year's set is recomputed on every call.
    """
    if cache is None:
        holidays = us_federal_holidays_observed(d.year)
    else:
        holidays = cache.for_year(d.year)
    return format_date(d) in holidays
