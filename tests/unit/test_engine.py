"""Tests for the calendar engine entry point."""

import json
from datetime import date

import pytest
from pydantic import ValidationError

from paycal.sdk import (
    CalendarInputs,
    Frequency,
    HolidayCache,
    InvalidDateFormat,
    generate_calendar,
    get_default_rules_path,
    set_setting,
)
from paycal.sdk.labels import EARLY_ACCESS_START, PAPERWORK_DEADLINE
from paycal.sdk.validation import CUSTOM_TIMELINE_REQUIRED


def make_inputs(**overrides) -> CalendarInputs:
    fields = {
        "frequency": "bi-weekly",
        "pay_begin": "2025-03-03",
        "pay_end": "2025-03-16",
        "first_check": "2025-03-21",
        "benefits_start": "2025-04-01",
        "employee_count": 25,
    }
    fields.update(overrides)
    return CalendarInputs.from_strings(**fields)


class TestCalendarInputs:

    def test_from_strings(self):
        inputs = make_inputs(service_model="Preferred", early_access="30 days")

        assert inputs.frequency == Frequency.BI_WEEKLY
        assert inputs.pay_begin == date(2025, 3, 3)
        assert inputs.service_model.value == "Preferred"
        assert inputs.early_access.offset_days == -28

    def test_defaults(self):
        inputs = make_inputs()
        assert inputs.service_model.value == "Core"
        assert inputs.early_access.value == "None"

    def test_malformed_date_fails_fast(self):
        with pytest.raises(InvalidDateFormat):
            make_inputs(first_check="3/21/2025")

    def test_unknown_frequency(self):
        with pytest.raises(ValueError):
            make_inputs(frequency="fortnightly")

    def test_from_strings_rejects_impossible_month(self):
        with pytest.raises(InvalidDateFormat):
            make_inputs(pay_begin="2025-13-01")

    @pytest.mark.parametrize("value", [0, 1741000000, "2025-03-03", "2025-03-03T00:00:00", "2025-13-01"])
    def test_constructor_only_accepts_dates(self, value):
        """Strings and timestamps must go through from_strings."""
        fields = make_inputs().model_dump()
        fields["pay_begin"] = value

        with pytest.raises(ValidationError):
            CalendarInputs(**fields)

    def test_constructor_accepts_dates(self):
        assert CalendarInputs(**make_inputs().model_dump()) == make_inputs()


class TestGenerateCalendar:

    def test_standard_calendar(self, rules):
        result = generate_calendar(make_inputs(), rules=rules)

        assert len(result.periods) == 7
        assert result.periods[0].begin == date(2025, 3, 3)
        assert result.periods[6].begin == date(2025, 5, 26)
        assert result.deadline == date(2025, 2, 19)
        assert result.deadline_offset == 17
        assert result.errors == []
        assert result.warnings == []
        assert result.is_valid

    def test_only_first_period_has_deadline(self, rules):
        result = generate_calendar(make_inputs(frequency="monthly"), rules=rules)
        assert result.periods[0].deadline is not None
        assert [p.deadline for p in result.periods[1:]] == [None] * 6

    def test_label_map_includes_deadline_and_early_access(self, rules):
        result = generate_calendar(make_inputs(early_access="2 weeks"), rules=rules)

        assert result.early_access_date == date(2025, 2, 17)
        assert result.label_map["2025-02-17"] == [EARLY_ACCESS_START]
        assert result.label_map["2025-01-30"] == [PAPERWORK_DEADLINE]

    def test_validation_errors_do_not_stop_computation(self, rules):
        result = generate_calendar(make_inputs(employee_count=500), rules=rules)

        assert result.errors == [CUSTOM_TIMELINE_REQUIRED]
        assert not result.is_valid
        assert result.deadline is None
        assert len(result.periods) == 7
        assert PAPERWORK_DEADLINE not in {label for labels in result.label_map.values() for label in labels}

    def test_recomputation_is_idempotent(self, rules):
        cache = HolidayCache()
        first = generate_calendar(make_inputs(), rules=rules, holiday_cache=cache)
        second = generate_calendar(make_inputs(), rules=rules, holiday_cache=cache)

        assert first == second
        assert 2025 in cache

    def test_uses_packaged_rules_by_default(self):
        assert generate_calendar(make_inputs()).deadline_offset == 17

    def test_settings_do_not_change_default_rules(self, tmp_path):
        custom = tmp_path / "rules.yaml"
        custom.write_text(get_default_rules_path().read_text().replace(
            "minimum_lead_business_days: 8", "minimum_lead_business_days: 10"))
        set_setting("deadline_rules", str(custom))

        assert generate_calendar(make_inputs()).deadline == date(2025, 2, 19)

    def test_corrupt_settings_file_ignored(self, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")

        result = generate_calendar(make_inputs())

        assert result.deadline == date(2025, 2, 19)
        assert result.is_valid

    def test_to_dict_is_json_ready(self, rules):
        data = generate_calendar(make_inputs(benefits_start="2025-03-10"), rules=rules).to_dict()

        assert data["deadline"] == "2025-02-19"
        assert data["valid"] is True
        assert data["inputs"]["frequency"] == "bi-weekly"
        assert data["periods"][1]["begin"] == "2025-03-17"
        assert data["periods"][1]["deadline"] is None
        assert len(data["warnings"]) == 2
        json.dumps(data)
