"""Pay Cal SDK - Core date rules for payroll calendars and paperwork deadlines."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    KNOWN_SETTINGS,
    # Deadline rules
    get_default_rules_path,
    get_deadline_rules_path,
    load_deadline_rules,
    packaged_deadline_rules,
    resolve_rules,
    DeadlineRulesError,
    SettingsError,
)

from .dates import (
    InvalidDateFormat,
    parse_date,
    format_date,
    clamp_to_midnight,
    is_weekend,
    subtract_business_days,
)

from .holidays import (
    HolidayCache,
    federal_holidays,
    us_federal_holidays_observed,
    is_federal_holiday_observed,
    nth_weekday_of_month,
    last_weekday_of_month,
)

from .schemas import (
    Frequency,
    ServiceModel,
    EarlyAccessOption,
    DeadlineBand,
    DeadlineRules,
    CalendarInputs,
    CalendarResult,
    Period,
    LabelMap,
)

from .periods import (
    next_period,
    roll_periods,
)

from .deadlines import (
    DeadlineResolution,
    deadline_offset,
    early_access_date,
    is_early_access_active,
    resolve_deadline,
)

from .validation import (
    validate_inputs,
    warning_messages,
)

from .labels import (
    LABEL_ORDER,
    build_label_map,
    display_months,
    month_grid,
)

from .engine import generate_calendar

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "KNOWN_SETTINGS",
    "get_default_rules_path",
    "get_deadline_rules_path",
    "load_deadline_rules",
    "packaged_deadline_rules",
    "resolve_rules",
    "DeadlineRulesError",
    "SettingsError",
    # Dates
    "InvalidDateFormat",
    "parse_date",
    "format_date",
    "clamp_to_midnight",
    "is_weekend",
    "subtract_business_days",
    # Holidays
    "HolidayCache",
    "federal_holidays",
    "us_federal_holidays_observed",
    "is_federal_holiday_observed",
    "nth_weekday_of_month",
    "last_weekday_of_month",
    # Schemas
    "Frequency",
    "ServiceModel",
    "EarlyAccessOption",
    "DeadlineBand",
    "DeadlineRules",
    "CalendarInputs",
    "CalendarResult",
    "Period",
    "LabelMap",
    # Periods
    "next_period",
    "roll_periods",
    # Deadlines
    "DeadlineResolution",
    "deadline_offset",
    "early_access_date",
    "is_early_access_active",
    "resolve_deadline",
    # Validation
    "validate_inputs",
    "warning_messages",
    # Labels
    "LABEL_ORDER",
    "build_label_map",
    "display_months",
    "month_grid",
    # Engine
    "generate_calendar",
]
