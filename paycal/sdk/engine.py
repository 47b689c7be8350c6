"""Payroll calendar engine.

SDK layer - pure computation over a snapshot of inputs. No CLI or
presentation. Call it again whenever an input changes; nothing is kept
between calls except an optional caller-owned HolidayCache.

Usage:
    from paycal.sdk import CalendarInputs, generate_calendar

    inputs = CalendarInputs.from_strings(
        frequency="bi-weekly",
        pay_begin="2025-03-03",
        pay_end="2025-03-16",
        first_check="2025-03-21",
        benefits_start="2025-04-01",
        employee_count=25,
    )
    result = generate_calendar(inputs)

    for period in result.periods:
        print(period.begin, period.end, period.check)
    if result.errors:
        print(f"Invalid: {result.errors}")
"""

import logging
import os
from typing import Optional

from .config import resolve_rules
from .deadlines import resolve_deadline
from .holidays import HolidayCache
from .labels import build_label_map
from .periods import roll_periods
from .schemas import CalendarInputs, CalendarResult, DeadlineRules, Period
from .validation import validate_inputs, warning_messages

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


def generate_calendar(
    inputs: CalendarInputs,
    rules: Optional[DeadlineRules] = None,
    holiday_cache: Optional[HolidayCache] = None,
) -> CalendarResult:
    """Compute pay periods, deadline, labels and validation for a client.

    Validation problems never stop the computation; they are returned in
    ``errors`` (blocking) and ``warnings`` (informational).

    Args:
        inputs: Input snapshot
        rules: Deadline rules (defaults to packaged rules)
        holiday_cache: Optional cache reused across calls

    Returns:
        CalendarResult with 7 periods, the label map and messages
    """
    rules = resolve_rules(rules)

    resolution = resolve_deadline(
        pay_begin=inputs.pay_begin,
        first_check=inputs.first_check,
        employee_count=inputs.employee_count,
        service_model=inputs.service_model,
        early_access=inputs.early_access,
        rules=rules,
    )

    first = Period(
        begin=inputs.pay_begin,
        end=inputs.pay_end,
        check=inputs.first_check,
        benefits_start=inputs.benefits_start,
        deadline=resolution.deadline,
    )
    periods = roll_periods(first, inputs.frequency)

    label_map = build_label_map(periods, resolution.early_access_date)
    errors = validate_inputs(inputs, rules, holiday_cache)
    warnings = warning_messages(inputs)

    logger.debug(
        f"calendar {inputs.frequency.value} from {inputs.pay_begin}: "
        f"deadline={resolution.deadline}, {len(errors)} error(s), {len(warnings)} warning(s)"
    )

    return CalendarResult(
        inputs=inputs,
        periods=periods,
        label_map=label_map,
        errors=errors,
        warnings=warnings,
        early_access_date=resolution.early_access_date,
        deadline_offset=resolution.deadline_offset,
    )
