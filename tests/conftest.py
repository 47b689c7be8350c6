"""Shared fixtures - every test runs against an empty config directory."""

import pytest

from paycal.sdk import get_default_rules_path, load_deadline_rules


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point PAY_CAL_CONFIG_PATH at a fresh directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("PAY_CAL_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def rules():
    """Packaged default deadline rules."""
    return load_deadline_rules(get_default_rules_path())
