"""Rich renderer for payroll calendars.

Transforms a CalendarResult into panels, a period table and month grids.
"""

from datetime import date
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from paycal.sdk import LABEL_ORDER, CalendarResult, display_months, format_date, month_grid
from paycal.sdk.labels import (
    BENEFITS_START,
    CHECK_DATE,
    EARLY_ACCESS_START,
    PAPERWORK_DEADLINE,
    PAY_PERIOD_END,
    PAY_PERIOD_START,
)

LABEL_STYLES = {
    PAY_PERIOD_START: "dark_orange",
    PAY_PERIOD_END: "medium_purple1",
    CHECK_DATE: "grey85",
    PAPERWORK_DEADLINE: "bold red",
    BENEFITS_START: "green",
    EARLY_ACCESS_START: "dodger_blue1",
}

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def render_calendar(console: Console, result: CalendarResult, show_months: bool = True) -> None:
    """Render a computed calendar.

    Args:
        console: Rich Console instance
        result: SDK output from generate_calendar()
        show_months: Also draw the month-by-month grid
    """
    # Errors and warnings first
    if result.errors:
        console.print(Panel(
            "\n".join(f"[bold red]{e}[/bold red]" for e in result.errors),
            title="Errors",
            border_style="red"
        ))
    for warning in result.warnings:
        console.print(Panel(
            f"[yellow]{warning}[/yellow]",
            title="Note",
            border_style="yellow"
        ))

    _render_summary(console, result)
    _render_periods(console, result)

    if show_months:
        pay_begin = result.inputs.pay_begin
        for month in display_months(result.label_map, pay_begin):
            _render_month(console, month, result.label_map)
        _render_legend(console)


def _render_summary(console: Console, result: CalendarResult) -> None:
    """Render inputs and resolved deadline."""
    inputs = result.inputs
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Frequency", inputs.frequency.value)
    table.add_row("Employees", str(inputs.employee_count))
    table.add_row("Service model", inputs.service_model.value)
    table.add_row("Early access", inputs.early_access.value)

    if result.deadline_offset is not None:
        table.add_row("Band offset", f"{result.deadline_offset} business days")
    else:
        table.add_row("Band offset", "[red]custom timeline[/red]")

    if result.early_access_date:
        table.add_row("Early access starts", _styled_date(result.early_access_date, EARLY_ACCESS_START))
    if result.deadline:
        table.add_row("Paperwork deadline", _styled_date(result.deadline, PAPERWORK_DEADLINE))
    else:
        table.add_row("Paperwork deadline", "[red]not defined[/red]")

    console.print(Panel(table, title="Summary", border_style="dim"))


def _render_periods(console: Console, result: CalendarResult) -> None:
    table = Table(title="Pay Periods", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Begin", style=LABEL_STYLES[PAY_PERIOD_START])
    table.add_column("End", style=LABEL_STYLES[PAY_PERIOD_END])
    table.add_column("Check", style=LABEL_STYLES[CHECK_DATE])
    table.add_column("Deadline", style=LABEL_STYLES[PAPERWORK_DEADLINE])

    for idx, period in enumerate(result.periods, 1):
        table.add_row(
            str(idx),
            format_date(period.begin),
            format_date(period.end),
            format_date(period.check),
            format_date(period.deadline) if period.deadline else "",
        )

    console.print(table)


def _render_month(console: Console, month: date, label_map: Dict[str, List[str]]) -> None:
    """Render one month as a Sunday-first grid."""
    table = Table(title=month.strftime("%B %Y"), box=box.SQUARE, show_lines=True)
    for header in WEEKDAY_HEADERS:
        table.add_column(header, min_width=12, vertical="top")

    for week in month_grid(month):
        cells = [_day_cell(d, label_map) for d in week]
        cells.extend([""] * (7 - len(cells)))
        table.add_row(*cells)

    console.print(table)


def _day_cell(d: Optional[date], label_map: Dict[str, List[str]]):
    if d is None:
        return ""
    cell = Text(str(d.day), style="bold")
    for label in label_map.get(format_date(d), []):
        cell.append("\n")
        cell.append(label, style=LABEL_STYLES.get(label, ""))
    return cell


def _render_legend(console: Console) -> None:
    legend = Text("Legend: ")
    for label in LABEL_ORDER:
        legend.append(label, style=LABEL_STYLES[label])
        legend.append("  ")
    console.print(legend)


def _styled_date(d: date, label: str) -> str:
    style = LABEL_STYLES[label]
    return f"[{style}]{format_date(d)}[/{style}] ({d.strftime('%a')})"
