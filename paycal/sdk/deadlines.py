"""Paperwork deadline and early access resolution.

Deadline precedence for the first pay period:

1. Early access active -> N business days before the early access date
   (N = early_access_deadline_business_days), regardless of headcount band
2. Otherwise -> first check date minus the band's business-day offset,
   but no later than minimum_lead_business_days before pay period begin
3. Headcount at/over custom_timeline_employees and no early access -> None

Early access dates are weekend-adjusted asymmetrically: the "30 days" option
moves forward to Monday, every other option moves back to Friday.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .config import resolve_rules
from .dates import SATURDAY, SUNDAY, subtract_business_days
from .schemas import DeadlineRules, EarlyAccessOption, ServiceModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeadlineResolution:
    """Outcome of resolving the first period's paperwork deadline."""

    deadline: Optional[date]
    deadline_offset: Optional[int]  # Band offset; None means custom timeline
    early_access_date: Optional[date]  # Weekend-adjusted; None if inactive

    @property
    def early_access_active(self) -> bool:
        return self.early_access_date is not None


def deadline_offset(
    employee_count: int,
    service_model: ServiceModel,
    rules: Optional[DeadlineRules] = None,
) -> Optional[int]:
    """Business-day offset for a headcount, or None if no band applies.

    None at or above the custom timeline threshold signals that the client
    needs a custom timeline; it is never replaced by a default.
    """
    rules = resolve_rules(rules)
    if employee_count >= rules.custom_timeline_employees:
        return None

    for band in rules.bands[ServiceModel(service_model)]:
        if band.contains(employee_count):
            return band.business_days_offset
    return None


def is_early_access_active(
    option: EarlyAccessOption,
    employee_count: int,
    rules: Optional[DeadlineRules] = None,
) -> bool:
    rules = resolve_rules(rules)
    return (
        EarlyAccessOption(option) != EarlyAccessOption.NONE
        and employee_count >= rules.early_access_min_employees
    )


def adjust_early_access_date(raw: date, option: EarlyAccessOption) -> date:
    """Move an early access date off the weekend.

    "30 days": Saturday -> Monday (+2), Sunday -> Monday (+1)
    Others:    Saturday -> Friday (-1), Sunday -> Friday (-2)
    """
    weekday = raw.weekday()
    if EarlyAccessOption(option) == EarlyAccessOption.THIRTY_DAYS:
        if weekday == SATURDAY:
            return raw + timedelta(days=2)
        if weekday == SUNDAY:
            return raw + timedelta(days=1)
        return raw

    if weekday == SATURDAY:
        return raw - timedelta(days=1)
    if weekday == SUNDAY:
        return raw - timedelta(days=2)
    return raw


def early_access_date(pay_begin: date, option: EarlyAccessOption) -> date:
    """Weekend-adjusted early access start for a first pay period begin."""
    option = EarlyAccessOption(option)
    raw = pay_begin + timedelta(days=option.offset_days)
    return adjust_early_access_date(raw, option)


def resolve_deadline(
    pay_begin: date,
    first_check: date,
    employee_count: int,
    service_model: ServiceModel,
    early_access: EarlyAccessOption,
    rules: Optional[DeadlineRules] = None,
) -> DeadlineResolution:
    """Resolve the first period's paperwork deadline.

    Args:
        pay_begin: First pay period begin date
        first_check: First check date
        employee_count: Client headcount
        service_model: Core or Preferred
        early_access: Selected early access option
        rules: Deadline rules (defaults to packaged rules)

    Returns:
        DeadlineResolution with the deadline, band offset, and early access date
    """
    rules = resolve_rules(rules)
    early_access = EarlyAccessOption(early_access)
    offset = deadline_offset(employee_count, service_model, rules)

    if is_early_access_active(early_access, employee_count, rules):
        ea_date = early_access_date(pay_begin, early_access)
        deadline = subtract_business_days(ea_date, rules.early_access_deadline_business_days)
        logger.debug(f"early access {early_access.value}: starts {ea_date}, deadline {deadline}")
        return DeadlineResolution(deadline=deadline, deadline_offset=offset, early_access_date=ea_date)

    if offset is None:
        logger.debug(f"no deadline band for {employee_count} employees; custom timeline")
        return DeadlineResolution(deadline=None, deadline_offset=None, early_access_date=None)

    deadline = subtract_business_days(first_check, offset)
    latest = subtract_business_days(pay_begin, rules.minimum_lead_business_days)
    if deadline > latest:
        logger.debug(f"deadline {deadline} clamped to {latest} ({rules.minimum_lead_business_days} BD before begin)")
        deadline = latest

    return DeadlineResolution(deadline=deadline, deadline_offset=offset, early_access_date=None)
