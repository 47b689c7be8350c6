"""Tests for settings and deadline rules loading."""

import json

import pytest
import yaml

from paycal.sdk import (
    DeadlineRulesError,
    ServiceModel,
    SettingsError,
    get_deadline_rules_path,
    get_default_rules_path,
    get_setting,
    get_settings_path,
    load_deadline_rules,
    load_settings,
    packaged_deadline_rules,
    resolve_rules,
    set_setting,
    unset_setting,
)


def write_rules(path, **overrides):
    """Write a rules file based on the packaged default."""
    with open(get_default_rules_path()) as f:
        data = yaml.safe_load(f)
    data.update(overrides)
    path.write_text(yaml.dump(data))
    return path


class TestSettings:

    def test_settings_path_uses_env(self, isolated_config):
        assert get_settings_path() == isolated_config / "settings.json"

    def test_empty_when_missing(self):
        assert load_settings() == {}
        assert get_setting("default_service_model", "Core") == "Core"

    def test_set_and_get(self, isolated_config):
        set_setting("default_service_model", "Preferred")

        assert get_setting("default_service_model") == "Preferred"
        saved = json.loads((isolated_config / "settings.json").read_text())
        assert saved == {"default_service_model": "Preferred"}

    def test_unset(self):
        set_setting("default_early_access", "1 week")

        assert unset_setting("default_early_access") is True
        assert unset_setting("default_early_access") is False
        assert load_settings() == {}

    def test_corrupt_settings_file(self, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")
        with pytest.raises(SettingsError, match="Invalid JSON"):
            load_settings()

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PAY_CAL_CONFIG_PATH")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_settings_path() == tmp_path / "xdg" / "pay-cal" / "settings.json"


class TestLoadDeadlineRules:

    def test_packaged_default(self):
        rules = load_deadline_rules()

        assert get_deadline_rules_path() == get_default_rules_path()
        assert [b.business_days_offset for b in rules.bands[ServiceModel.CORE]] == [17, 22, 27, 32]
        assert [b.business_days_offset for b in rules.bands[ServiceModel.PREFERRED]] == [22, 27, 32, 37]
        assert rules.custom_timeline_employees == 500
        assert rules.early_access_min_employees == 10
        assert rules.early_access_deadline_business_days == 12
        assert rules.minimum_lead_business_days == 8

    def test_custom_rules_from_settings(self, tmp_path):
        path = write_rules(tmp_path / "rules.yaml", minimum_lead_business_days=5)
        set_setting("deadline_rules", str(path))

        assert get_deadline_rules_path() == path
        assert load_deadline_rules().minimum_lead_business_days == 5

    def test_explicit_path_wins(self, tmp_path):
        set_setting("deadline_rules", str(tmp_path / "missing.yaml"))
        path = write_rules(tmp_path / "rules.yaml", early_access_deadline_business_days=15)

        assert load_deadline_rules(path).early_access_deadline_business_days == 15

    def test_missing_file(self, tmp_path):
        with pytest.raises(DeadlineRulesError, match="not found"):
            load_deadline_rules(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("bands: [unclosed")
        with pytest.raises(DeadlineRulesError, match="Invalid YAML"):
            load_deadline_rules(path)

    def test_not_a_dictionary(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(DeadlineRulesError, match="dictionary"):
            load_deadline_rules(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = write_rules(tmp_path / "rules.yaml", minimum_lead_days=8)
        with pytest.raises(DeadlineRulesError, match="minimum_lead_days"):
            load_deadline_rules(path)

    def test_gap_between_bands_rejected(self, tmp_path):
        bands = {
            "Core": [
                {"min_employees": 0, "max_employees": 29, "business_days_offset": 17},
                {"min_employees": 31, "max_employees": 499, "business_days_offset": 22},
            ],
            "Preferred": [
                {"min_employees": 0, "max_employees": 499, "business_days_offset": 22},
            ],
        }
        path = write_rules(tmp_path / "rules.yaml", bands=bands)
        with pytest.raises(DeadlineRulesError, match="not contiguous"):
            load_deadline_rules(path)

    def test_bands_must_reach_custom_threshold(self, tmp_path):
        bands = {
            model: [{"min_employees": 0, "max_employees": 99, "business_days_offset": 20}]
            for model in ("Core", "Preferred")
        }
        path = write_rules(tmp_path / "rules.yaml", bands=bands)
        with pytest.raises(DeadlineRulesError, match="must end at 499"):
            load_deadline_rules(path)

    def test_missing_service_model_rejected(self, tmp_path):
        bands = {"Core": [{"min_employees": 0, "max_employees": 499, "business_days_offset": 20}]}
        path = write_rules(tmp_path / "rules.yaml", bands=bands)
        with pytest.raises(DeadlineRulesError, match="Preferred: no bands defined"):
            load_deadline_rules(path)

    def test_unsorted_bands_are_sorted(self, tmp_path):
        bands = {
            model: [
                {"min_employees": 100, "max_employees": 499, "business_days_offset": 30},
                {"min_employees": 0, "max_employees": 99, "business_days_offset": 20},
            ]
            for model in ("Core", "Preferred")
        }
        rules = load_deadline_rules(write_rules(tmp_path / "rules.yaml", bands=bands))
        assert [b.min_employees for b in rules.bands[ServiceModel.CORE]] == [0, 100]

    def test_corrupt_settings_reported_as_rules_error(self, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")
        with pytest.raises(DeadlineRulesError, match="Invalid JSON"):
            load_deadline_rules()


class TestResolveRules:

    def test_explicit_rules_returned(self, rules):
        assert resolve_rules(rules) is rules

    def test_packaged_rules_loaded_once(self):
        assert resolve_rules() is packaged_deadline_rules()
        assert packaged_deadline_rules() is packaged_deadline_rules()

    def test_settings_override_not_consulted(self, tmp_path):
        path = write_rules(tmp_path / "rules.yaml", minimum_lead_business_days=5)
        set_setting("deadline_rules", str(path))

        assert resolve_rules().minimum_lead_business_days == 8
