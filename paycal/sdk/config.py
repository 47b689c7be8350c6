"""Configuration management for Pay Cal.

Two kinds of configuration:

1. settings.json - Machine-specific preferences
   - default_frequency, default_service_model, default_early_access:
     defaults for the `calendar` command
   - deadline_rules: path to a custom deadline rules YAML (optional)

2. deadline_rules.yaml - Deadline band tables and thresholds
   - Shipped with the package under paycal/config/
   - Can be replaced per machine via the deadline_rules setting, which
     load_deadline_rules() honours. resolve_rules() and the SDK functions
     that default their rules always use the packaged file.

Config directory resolution:
1. PAY_CAL_CONFIG_PATH environment variable (if set)
2. XDG_CONFIG_HOME/pay-cal/ or ~/.config/pay-cal/
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .schemas import DeadlineRules


APP_NAME = "pay-cal"
SETTINGS_FILENAME = "settings.json"
DEADLINE_RULES_FILENAME = "deadline_rules.yaml"

# Settings keys the CLI understands
KNOWN_SETTINGS = (
    "default_frequency",
    "default_service_model",
    "default_early_access",
    "deadline_rules",
)


class DeadlineRulesError(Exception):
    """Raised when deadline rules cannot be loaded or fail validation."""
    pass


class SettingsError(Exception):
    """Raised when settings.json cannot be parsed."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. PAY_CAL_CONFIG_PATH environment variable
    2. ~/.config/pay-cal/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("PAY_CAL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


# =============================================================================
# Deadline rules
# =============================================================================

def get_default_rules_path() -> Path:
    """Path to the deadline rules shipped with the package."""
    return Path(__file__).parent.parent / "config" / DEADLINE_RULES_FILENAME


def get_deadline_rules_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Resolve which deadline rules file to use.

    Resolution order:
    1. Explicit path argument
    2. settings.json "deadline_rules" key
    3. Packaged default
    """
    if path:
        return Path(path).expanduser()

    try:
        custom = get_setting("deadline_rules")
    except SettingsError as e:
        raise DeadlineRulesError(str(e)) from e
    if custom:
        return Path(custom).expanduser()

    return get_default_rules_path()


def load_deadline_rules(path: Optional[Union[str, Path]] = None) -> DeadlineRules:
    """Load and validate deadline rules.

    Args:
        path: Optional explicit rules file (see get_deadline_rules_path)

    Returns:
        Validated DeadlineRules

    Raises:
        DeadlineRulesError: If the file is missing, not YAML, or invalid
    """
    rules_path = get_deadline_rules_path(path)
    if not rules_path.exists():
        raise DeadlineRulesError(f"Deadline rules file not found: {rules_path}")

    try:
        with open(rules_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DeadlineRulesError(f"Invalid YAML in {rules_path}: {e}") from e

    if not isinstance(data, dict):
        raise DeadlineRulesError(
            f"Deadline rules must be a YAML dictionary, got {type(data).__name__}: {rules_path}"
        )

    try:
        return DeadlineRules.model_validate(data)
    except ValidationError as e:
        raise DeadlineRulesError(f"Invalid deadline rules in {rules_path}:\n{e}") from e


@lru_cache(maxsize=None)
def packaged_deadline_rules() -> DeadlineRules:
    """Deadline rules shipped with the package, loaded once."""
    return load_deadline_rules(get_default_rules_path())


def resolve_rules(rules: Optional[DeadlineRules] = None) -> DeadlineRules:
    """Return ``rules`` if given, otherwise the packaged deadline rules.

    settings.json is not consulted; callers wanting the configured override
    pass ``load_deadline_rules()`` explicitly.
    """
    if rules is not None:
        return rules
    return packaged_deadline_rules()
