"""Output formatters for different formats."""

import json
from datetime import datetime
from itertools import groupby
from typing import Any

import yaml
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.table import Table
from rich.text import Text

from autoplanner.utils.datetime_utils import format_interval
from autoplanner.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        # Default to pretty
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "events" in data or "tasks" in data:
            format_dict_table(data.get("events") or data.get("tasks") or [])
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "URGENT": "🔴",
    "HIGH": "🟠",
    "MEDIUM": "🟡",
    "LOW": "🟢",
}

PRIORITY_COLORS = {
    "URGENT": "bold red",
    "HIGH": "bold orange3",
    "MEDIUM": "bold yellow",
    "LOW": "green",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "locked": "🔒",
    "manual": "✋",
}


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict) and "events" in data:
        format_calendar_pretty(data["events"], data.get("projects") or [])
    elif isinstance(data, dict) and "tasks" in data:
        format_tasks_pretty(data["tasks"], data.get("projects") or [])
    elif isinstance(data, list) and isinstance(data[0], dict):
        if "estimated_hours" in data[0]:
            format_tasks_pretty(data)
        elif "start" in data[0]:
            format_calendar_pretty(data)
        else:
            format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_calendar_pretty(events: list[dict], projects: list[dict] | None = None) -> None:
    """Agenda view: events grouped by day, in start order."""
    if not events:
        console.print("[yellow]No events scheduled[/yellow]")
        return

    project_titles = {p["id"]: p["title"] for p in projects or []}
    ordered = sorted(events, key=lambda e: (_parse(e["start"]), e["title"]))

    header = Text()
    header.append("📅 Calendar ", style="bold cyan")
    header.append(f"({len(ordered)} events)", style="dim")
    console.print(header)

    for day, day_events in groupby(ordered, key=lambda e: _parse(e["start"]).date()):
        console.print()
        console.print(f"[bold]{day:%a %d %b %Y}[/bold]")
        for event in day_events:
            line = Text("  ")
            if event.get("all_day"):
                line.append("all day    ", style="dim")
            else:
                line.append(
                    f"{_parse(event['start']):%H:%M}-{_parse(event['end']):%H:%M} ",
                    style="dim",
                )
            line.append("● ", style=_color_style(event.get("color")))
            line.append(event["title"])
            project = project_titles.get(event.get("project_id"))
            if project:
                line.append(f"  📁 {project}", style="dim")
            console.print(line)


def format_tasks_pretty(tasks: list[dict], projects: list[dict] | None = None) -> None:
    """Tasks grouped by priority, most important first."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    project_titles = {p["id"]: p["title"] for p in projects or []}
    active = [t for t in tasks if not t.get("completed")]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(active)} active, {len(tasks) - len(active)} completed)", style="dim")
    console.print(header)

    for priority in PRIORITY_ICONS:
        group = [t for t in tasks if t.get("priority") == priority]
        if not group:
            continue
        console.print()
        console.print(
            f"{PRIORITY_ICONS[priority]} [{PRIORITY_COLORS[priority]}]{priority}[/]"
        )
        for task in group:
            format_task_item(task, project_titles.get(task.get("project_id")))


def format_task_item(task: dict, project_title: str | None = None) -> None:
    """One task line plus its schedule."""
    if task.get("completed"):
        icon = STATUS_ICONS["completed"]
    elif task.get("locked"):
        icon = STATUS_ICONS["locked"]
    elif not task.get("auto_schedule"):
        icon = STATUS_ICONS["manual"]
    else:
        icon = STATUS_ICONS["open"]

    line = Text(f"  {icon} ")
    line.append(task["title"], style="dim strike" if task.get("completed") else "")
    line.append(f"  {task.get('estimated_hours')}h", style="dim")
    if project_title:
        line.append(f"  📁 {project_title}", style="dim")
    console.print(line)

    start, end = task.get("scheduled_start"), task.get("scheduled_end")
    if start and end:
        console.print(f"      [dim]⏰ {format_interval(_parse(start), _parse(end))}[/dim]")
    else:
        console.print("      [dim]⏰ unscheduled[/dim]")


# ============================================================================
# Helper Functions
# ============================================================================


def _parse(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def _color_style(color: str | None) -> str:
    if not color:
        return "white"
    try:
        Style.parse(color)
    except StyleSyntaxError:
        return "white"
    return color
