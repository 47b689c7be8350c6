"""Pay period rollover.

Given the first pay period, produce the following periods for a payroll
frequency. Each step is a pure transition from the prior period:

- weekly / bi-weekly: begin, end and check all shift by 7 / 14 days
- semi monthly: fixed 1st-15th / 16th-month end halves
- monthly: begin moves one calendar month, first period's length is kept

For semi monthly and monthly the check date trails the end date by the same
number of calendar days as in the first period (the end-to-check lag).
"""

from calendar import monthrange
from datetime import date, timedelta
from functools import reduce
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from .schemas import Frequency, Period

# One initial period plus this many rolled forward
ADDITIONAL_PERIODS = 6

_FIXED_STEP_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.BI_WEEKLY: 14,
}


def end_of_month(d: date) -> date:
    return date(d.year, d.month, monthrange(d.year, d.month)[1])


def next_semi_monthly_period(prior_end: date) -> Tuple[date, date]:
    """Return (begin, end) of the semi-monthly half following ``prior_end``."""
    next_day = prior_end + timedelta(days=1)
    if next_day.day <= 15:
        return date(next_day.year, next_day.month, 1), date(next_day.year, next_day.month, 15)
    return date(next_day.year, next_day.month, 16), end_of_month(next_day)


def next_monthly_period(prior_begin: date, length_days: int) -> Tuple[date, date]:
    """Return (begin, end) one calendar month after ``prior_begin``.

    The begin day-of-month is clamped to the target month (Jan 31 -> Feb 28).
    The end is begin + length - 1, but never past the begin's month end.
    """
    begin = prior_begin + relativedelta(months=1)
    end = min(begin + timedelta(days=length_days - 1), end_of_month(begin))
    return begin, end


def next_period(
    prior: Period,
    frequency: Frequency,
    lag_days: int,
    length_days: Optional[int] = None,
) -> Period:
    """Compute the period following ``prior``.

    Args:
        prior: The previous period
        frequency: Payroll frequency
        lag_days: Calendar days from period end to check date (first period)
        length_days: Inclusive monthly period length; defaults to prior's

    Returns:
        New Period with no deadline.
    """
    frequency = Frequency(frequency)

    if frequency in _FIXED_STEP_DAYS:
        step = timedelta(days=_FIXED_STEP_DAYS[frequency])
        return Period(
            begin=prior.begin + step,
            end=prior.end + step,
            check=prior.check + step,
            benefits_start=prior.benefits_start,
        )

    if frequency == Frequency.SEMI_MONTHLY:
        begin, end = next_semi_monthly_period(prior.end)
    else:
        begin, end = next_monthly_period(
            prior.begin, length_days if length_days is not None else prior.length_days
        )

    return Period(
        begin=begin,
        end=end,
        check=end + timedelta(days=lag_days),
        benefits_start=prior.benefits_start,
    )


def roll_periods(
    first: Period,
    frequency: Frequency,
    count: int = ADDITIONAL_PERIODS,
) -> List[Period]:
    """Return ``first`` followed by ``count`` rolled-forward periods.

    Only ``first`` keeps its deadline; rolled periods never carry one.
    """
    lag_days = (first.check - first.end).days
    length_days = first.length_days

    def step(periods: List[Period], _: int) -> List[Period]:
        return periods + [next_period(periods[-1], frequency, lag_days, length_days)]

    return reduce(step, range(count), [first])
