"""Input validation for payroll calendars.

Two independent checks, both pure functions of the inputs:

- validate_inputs: blocking errors. The calendar is still computed, but a
  non-empty list means the result should not be relied on.
- warning_messages: informational notes about the benefits start date.

Messages are returned as data; nothing here raises for domain conditions.
"""

from typing import List, Optional

from .config import resolve_rules
from .dates import is_weekend
from .holidays import HolidayCache, is_federal_holiday_observed
from .schemas import CalendarInputs, DeadlineRules, EarlyAccessOption

MAX_BENEFITS_LAG_DAYS = 30

END_BEFORE_BEGIN = "Pay period end date cannot be before pay period begin date."
BENEFITS_BEFORE_BEGIN = "Benefits start date cannot be before the first pay period begins."
BENEFITS_TOO_LATE = "Benefits start date must be within 30 days of the pay period begin date."
CHECK_DATE_NOT_BUSINESS_DAY = "Check date cannot fall on a weekend or federal holiday."
EARLY_ACCESS_TOO_FEW_EMPLOYEES = "Early Access requires at least {min_employees} employees."
CUSTOM_TIMELINE_REQUIRED = "Custom Timeline Required! - please submit sales support case"

BILLED_FULL_MONTH = "Client will be billed for the entire month."
NO_DEDUCTIBLE_CREDIT = "Client will not be eligible for deductible credit."


def validate_inputs(
    inputs: CalendarInputs,
    rules: Optional[DeadlineRules] = None,
    holiday_cache: Optional[HolidayCache] = None,
) -> List[str]:
    """Return blocking validation errors, in a fixed order."""
    rules = resolve_rules(rules)
    min_ea_employees = rules.early_access_min_employees
    custom_threshold = rules.custom_timeline_employees

    errors = []
    begin = inputs.pay_begin

    if inputs.pay_end < begin:
        errors.append(END_BEFORE_BEGIN)
    if inputs.benefits_start < begin:
        errors.append(BENEFITS_BEFORE_BEGIN)
    if (inputs.benefits_start - begin).days > MAX_BENEFITS_LAG_DAYS:
        errors.append(BENEFITS_TOO_LATE)
    if is_weekend(inputs.first_check) or is_federal_holiday_observed(inputs.first_check, holiday_cache):
        errors.append(CHECK_DATE_NOT_BUSINESS_DAY)
    if inputs.early_access != EarlyAccessOption.NONE and inputs.employee_count < min_ea_employees:
        errors.append(EARLY_ACCESS_TOO_FEW_EMPLOYEES.format(min_employees=min_ea_employees))
    if inputs.employee_count >= custom_threshold:
        errors.append(CUSTOM_TIMELINE_REQUIRED)

    return errors


def warning_messages(inputs: CalendarInputs) -> List[str]:
    """Return non-blocking warnings about the benefits start date."""
    warnings = []
    day = inputs.benefits_start.day

    # 2nd-15th: billed for the whole month
    if 1 < day < 16:
        warnings.append(BILLED_FULL_MONTH)
    # Anything but the 1st: no deductible credit
    if day != 1:
        warnings.append(NO_DEDUCTIBLE_CREDIT)

    return warnings
