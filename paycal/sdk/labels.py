"""Project computed dates onto calendar days.

A label map is keyed by ISO date. Each day holds the labels of every event
landing on it, in the order they were added, without duplicates.

Also provides the month window and Sunday-first month grid used by
renderers to lay the label map out as a multi-month calendar.
"""

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from .dates import format_date, parse_date
from .schemas import LabelMap, Period

PAY_PERIOD_START = "Pay Period Start"
PAY_PERIOD_END = "Pay Period End"
CHECK_DATE = "Check Date"
PAPERWORK_DEADLINE = "Paperwork Deadline"
BENEFITS_START = "Benefits Start Date"
EARLY_ACCESS_START = "Early Access Start Date"

# Legend order
LABEL_ORDER = (
    PAY_PERIOD_START,
    PAY_PERIOD_END,
    CHECK_DATE,
    PAPERWORK_DEADLINE,
    BENEFITS_START,
    EARLY_ACCESS_START,
)

# Months rendered from the pay period begin month onward
BASE_MONTHS = 7
# Earlier months shown only if they hold a label
MAX_PRIOR_MONTHS = 2


def add_label(label_map: LabelMap, d: date, label: str) -> None:
    """Append ``label`` to the day's labels unless already present."""
    labels = label_map.setdefault(format_date(d), [])
    if label not in labels:
        labels.append(label)


def build_label_map(
    periods: Iterable[Period],
    early_access_date: Optional[date] = None,
) -> LabelMap:
    """Fold pay periods (and the early access date) into a label map.

    Only the first period contributes a paperwork deadline.
    """
    label_map: LabelMap = {}

    for idx, period in enumerate(periods):
        add_label(label_map, period.begin, PAY_PERIOD_START)
        add_label(label_map, period.end, PAY_PERIOD_END)
        add_label(label_map, period.check, CHECK_DATE)
        if idx == 0 and period.deadline:
            add_label(label_map, period.deadline, PAPERWORK_DEADLINE)
        add_label(label_map, period.benefits_start, BENEFITS_START)

    if early_access_date:
        add_label(label_map, early_access_date, EARLY_ACCESS_START)

    return label_map


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def prior_months_needed(label_map: LabelMap, pay_begin: date) -> int:
    """How many months before the pay begin month hold labels (0-2).

    Returns the furthest such month, so a label two months back pulls in
    the month in between as well.
    """
    base = month_start(pay_begin)
    labelled = {month_start(parse_date(iso)) for iso in label_map}

    need = 0
    for k in range(1, MAX_PRIOR_MONTHS + 1):
        if base - relativedelta(months=k) in labelled:
            need = k
    return need


def display_months(label_map: LabelMap, pay_begin: date) -> List[date]:
    """First-of-month dates to render, oldest first."""
    prior = prior_months_needed(label_map, pay_begin)
    start = month_start(pay_begin) - relativedelta(months=prior)
    return [start + relativedelta(months=i) for i in range(BASE_MONTHS + prior)]


def month_grid(month: date) -> List[List[Optional[date]]]:
    """Sunday-first weeks of a month.

    Leading cells before the 1st are None; the last week is not padded.
    """
    first = month_start(month)
    days_in_month = monthrange(first.year, first.month)[1]
    # date.weekday() is Monday == 0; shift so Sunday == 0
    leading = (first.weekday() + 1) % 7

    cells: List[Optional[date]] = [None] * leading
    cells.extend(first + timedelta(days=i) for i in range(days_in_month))
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
