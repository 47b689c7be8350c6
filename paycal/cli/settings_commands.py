"""Settings CLI commands for Pay Cal.

Manages settings.json - calendar defaults and the deadline rules path.
"""

import click
from pathlib import Path

from paycal.sdk import (
    KNOWN_SETTINGS,
    DeadlineRulesError,
    EarlyAccessOption,
    SettingsError,
    Frequency,
    ServiceModel,
    get_deadline_rules_path,
    get_settings_path,
    load_deadline_rules,
    load_settings,
    set_setting,
    unset_setting,
)

_CHOICES = {
    "default_frequency": [f.value for f in Frequency],
    "default_service_model": [m.value for m in ServiceModel],
    "default_early_access": [o.value for o in EarlyAccessOption],
}


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - default_frequency: weekly, bi-weekly, semi monthly, monthly
    - default_service_model: Core or Preferred
    - default_early_access: None, 1 week, 2 weeks, 3 weeks, 30 days
    - deadline_rules: path to a custom deadline rules YAML
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  deadline_rules: {get_deadline_rules_path()}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    \b
    Examples:
        pay-cal settings set default_service_model Preferred
        pay-cal settings set default_early_access "2 weeks"
        pay-cal settings set deadline_rules ~/rules/2026.yaml
    """
    if key in _CHOICES and value not in _CHOICES[key]:
        choices = ", ".join(_CHOICES[key])
        raise click.BadParameter(f"'{value}' is not one of: {choices}", param_hint="VALUE")

    if key == "deadline_rules":
        rules_path = Path(value).expanduser().resolve()
        # Validate before saving
        try:
            load_deadline_rules(rules_path)
        except DeadlineRulesError as e:
            raise click.ClickException(str(e))
        value = str(rules_path)

    try:
        path = set_setting(key, value)
    except SettingsError as e:
        raise click.ClickException(str(e))
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key):
    """Remove a setting, reverting to the default."""
    try:
        cleared = unset_setting(key)
    except SettingsError as e:
        raise click.ClickException(str(e))

    if cleared:
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
