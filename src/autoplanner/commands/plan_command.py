"""Planner commands - plan, tasks, events and check.

Each invocation is one planner session: the seed is loaded, the command runs,
and nothing is written back.
"""

from pathlib import Path

import typer

from autoplanner.commands.decorators import AppError, command_wrapper
from autoplanner.services.config_service import get_config_service
from autoplanner.services.planner_service import PlannerService
from autoplanner.services.seed import dump_state
from autoplanner.utils.datetime_utils import format_interval, to_local_naive
from autoplanner.utils.exit_codes import ERROR_CONFLICT, ERROR_INVALID_ARGS
from autoplanner.utils.typer_helpers import SuggestingGroup
from autoplanner.utils.ui.console import get_console
from autoplanner.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    format_warning,
)

app = typer.Typer(cls=SuggestingGroup, help="Planner commands")
console = get_console()

_SEED_HELP = "Seed file (.json, .yaml); defaults to the configured seed or sample data"
_OUTPUT_HELP = "Output format: pretty, table, json or yaml"


def _open_session(seed: Path | None) -> tuple[PlannerService, str]:
    """Start a planner session from the configured settings.

    Returns:
        The service and the configured default output format
    """
    config_service = get_config_service()
    config = config_service.config
    console.no_color = not config.output.color
    service = PlannerService(
        config.scheduling,
        seed=config_service.seed_provider(str(seed) if seed else None),
    )
    return service, config.output.format


@app.command("plan")
@command_wrapper
def plan(
    seed: Path | None = typer.Option(None, "--seed", "-s", help=_SEED_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
) -> None:
    """Auto-schedule every eligible task and show the calendar."""
    service, default_output = _open_session(seed)
    output = output or default_output

    placed = service.auto_schedule_tasks()
    data = dump_state(service.state())

    if output in ("pretty", "table"):
        if placed:
            format_success(f"Placed {len(placed)} task(s)")
        else:
            format_info("Nothing to schedule")
    format_output(data if output != "table" else data["events"], output)


@app.command("tasks")
@command_wrapper
def tasks(
    seed: Path | None = typer.Option(None, "--seed", "-s", help=_SEED_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    run_plan: bool = typer.Option(
        False, "--plan", help="Auto-schedule before listing"
    ),
) -> None:
    """List tasks with their status and schedule."""
    service, default_output = _open_session(seed)
    if run_plan:
        service.auto_schedule_tasks()

    data = dump_state(service.state())
    format_output({"tasks": data["tasks"], "projects": data["projects"]}, output or default_output)


@app.command("events")
@command_wrapper
def events(
    seed: Path | None = typer.Option(None, "--seed", "-s", help=_SEED_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    run_plan: bool = typer.Option(
        False, "--plan", help="Auto-schedule before listing"
    ),
) -> None:
    """List calendar events."""
    service, default_output = _open_session(seed)
    if run_plan:
        service.auto_schedule_tasks()

    data = dump_state(service.state())
    format_output(
        {"events": data["events"], "projects": data["projects"]}, output or default_output
    )


@app.command("check")
@command_wrapper
def check(
    start: str = typer.Argument(..., help="Interval start (ISO 8601)"),
    end: str = typer.Argument(..., help="Interval end (ISO 8601)"),
    seed: Path | None = typer.Option(None, "--seed", "-s", help=_SEED_HELP),
    run_plan: bool = typer.Option(
        False, "--plan", help="Auto-schedule before checking"
    ),
) -> None:
    """Check whether an interval is free of events.

    Exits with code 3 when the interval is taken.
    """
    try:
        start_at, end_at = to_local_naive(start), to_local_naive(end)
    except ValueError as e:
        raise AppError(f"Invalid datetime: {e}", ERROR_INVALID_ARGS) from e
    if end_at <= start_at:
        raise AppError("END must be after START", ERROR_INVALID_ARGS)

    service, _ = _open_session(seed)
    if run_plan:
        service.auto_schedule_tasks()

    conflicts = service.availability.conflicts(start_at, end_at)
    interval = format_interval(start_at, end_at)
    if not conflicts:
        format_success(f"{interval} is available")
        return

    format_warning(f"{interval} overlaps {len(conflicts)} event(s)")
    for event in conflicts:
        console.print(f"  • {event.title} [dim]({format_interval(event.start, event.end)})[/dim]")
    raise typer.Exit(code=ERROR_CONFLICT)
