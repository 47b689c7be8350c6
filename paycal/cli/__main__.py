"""Pay Cal CLI - Command-line interface for payroll calendars."""

import json

import click
from rich import box
from rich.console import Console
from rich.table import Table

from paycal import __version__
from paycal.sdk import (
    CalendarInputs,
    DeadlineRulesError,
    EarlyAccessOption,
    Frequency,
    HolidayCache,
    InvalidDateFormat,
    ServiceModel,
    SettingsError,
    federal_holidays,
    format_date,
    generate_calendar,
    get_setting,
    load_deadline_rules,
)

from .renderers.calendar_renderer import render_calendar
from .settings_commands import settings as settings_group

FREQUENCY_CHOICES = [f.value for f in Frequency]
SERVICE_MODEL_CHOICES = [m.value for m in ServiceModel]
EARLY_ACCESS_CHOICES = [o.value for o in EarlyAccessOption]


@click.group()
@click.version_option(version=__version__, prog_name="pay-cal")
def cli():
    """Pay Cal - Payroll calendars and paperwork deadlines.

    Computes pay periods, check dates and the paperwork submission
    deadline for a client's first payroll.

    Settings are loaded from (in order):

    \b
    1. PAY_CAL_CONFIG_PATH environment variable
    2. ~/.config/pay-cal/settings.json (XDG default)

    Run 'pay-cal settings show' to see current settings.
    """
    pass


cli.add_command(settings_group)


def _load_rules(rules_path):
    try:
        return load_deadline_rules(rules_path)
    except DeadlineRulesError as e:
        raise click.ClickException(str(e))


@cli.command("calendar")
@click.option("--frequency", "-f", type=click.Choice(FREQUENCY_CHOICES),
              help="Payroll frequency (default: settings, else bi-weekly)")
@click.option("--begin", "pay_begin", required=True, help="First pay period begin date (YYYY-MM-DD)")
@click.option("--end", "pay_end", required=True, help="First pay period end date (YYYY-MM-DD)")
@click.option("--check", "first_check", required=True, help="First check date (YYYY-MM-DD)")
@click.option("--benefits", "benefits_start", required=True, help="Benefits start date (YYYY-MM-DD)")
@click.option("--employees", "-n", "employee_count", type=click.IntRange(min=0), required=True,
              help="Client employee count")
@click.option("--service-model", "-s", type=click.Choice(SERVICE_MODEL_CHOICES),
              help="Service model (default: settings, else Core)")
@click.option("--early-access", "-e", type=click.Choice(EARLY_ACCESS_CHOICES),
              help="Early access option (default: settings, else None)")
@click.option("--rules", "rules_path", type=click.Path(), help="Custom deadline rules YAML")
@click.option("--no-grid", is_flag=True, help="Skip the month-by-month grid")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def calendar(frequency, pay_begin, pay_end, first_check, benefits_start, employee_count,
             service_model, early_access, rules_path, no_grid, output_format):
    """Compute a payroll calendar and paperwork deadline.

    Always produces 7 pay periods. Validation errors are shown with the
    result and make the command exit with status 1.

    \b
    Examples:
      pay-cal calendar --begin 2025-03-03 --end 2025-03-16 \\
          --check 2025-03-21 --benefits 2025-04-01 -n 25
      pay-cal calendar -f monthly --begin 2025-03-01 --end 2025-03-31 \\
          --check 2025-04-04 --benefits 2025-04-01 -n 80 -s Preferred -e "2 weeks"
    """
    try:
        frequency = frequency or get_setting("default_frequency", Frequency.BI_WEEKLY.value)
        service_model = service_model or get_setting("default_service_model", ServiceModel.CORE.value)
        early_access = early_access or get_setting("default_early_access", EarlyAccessOption.NONE.value)
    except SettingsError as e:
        raise click.ClickException(str(e))

    try:
        inputs = CalendarInputs.from_strings(
            frequency=frequency,
            pay_begin=pay_begin,
            pay_end=pay_end,
            first_check=first_check,
            benefits_start=benefits_start,
            employee_count=employee_count,
            service_model=service_model,
            early_access=early_access,
        )
    except InvalidDateFormat as e:
        raise click.BadParameter(str(e))
    except ValueError as e:
        # Bad default in settings.json
        raise click.ClickException(f"{e} (check 'pay-cal settings show')")

    rules = _load_rules(rules_path)
    result = generate_calendar(inputs, rules=rules)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_calendar(Console(), result, show_months=not no_grid)

    if result.errors:
        raise click.ClickException(f"{len(result.errors)} validation error(s)")


@cli.command("holidays")
@click.argument("year", type=click.IntRange(min=1, max=9999))
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def holidays(year, output_format):
    """List observed US federal holidays for YEAR.

    Holidays on a Saturday are observed the Friday before, holidays on a
    Sunday the Monday after.
    """
    observed = federal_holidays(year)

    if output_format == "json":
        click.echo(json.dumps({name: format_date(d) for name, d in observed.items()}, indent=2))
        return

    table = Table(title=f"Federal Holidays {year}", box=box.ROUNDED)
    table.add_column("Holiday", style="bold")
    table.add_column("Observed", style="cyan")
    table.add_column("Day")
    for name, d in observed.items():
        table.add_row(name, format_date(d), d.strftime("%A"))

    Console().print(table)


@cli.command("bands")
@click.option("--rules", "rules_path", type=click.Path(), help="Custom deadline rules YAML")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def bands(rules_path, output_format):
    """Show paperwork deadline bands by service model."""
    rules = _load_rules(rules_path)

    if output_format == "json":
        click.echo(json.dumps(rules.model_dump(mode="json"), indent=2))
        return

    console = Console()
    table = Table(title="Paperwork Deadline Bands", box=box.ROUNDED)
    table.add_column("Service Model", style="bold")
    table.add_column("Employees", justify="right")
    table.add_column("Business Days", justify="right", style="cyan")

    for model in ServiceModel:
        for band in rules.bands[model]:
            table.add_row(model.value, f"{band.min_employees}-{band.max_employees}",
                          str(band.business_days_offset))
        table.add_row(model.value, f"{rules.custom_timeline_employees}+", "custom", style="dim")
        table.add_section()

    console.print(table)
    console.print(
        f"Early access: {rules.early_access_min_employees}+ employees, deadline "
        f"{rules.early_access_deadline_business_days} BD before early access date"
    )
    console.print(
        f"Without early access: deadline no later than "
        f"{rules.minimum_lead_business_days} BD before pay period begin"
    )


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
