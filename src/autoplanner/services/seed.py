"""Seed data for a planner session.

A seed is the initial set of projects, tasks and events a session starts
from (and returns to on reset). Seeds come from the built-in sample data or
from a JSON/YAML file with top-level ``projects``, ``tasks`` and ``events``
lists.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from autoplanner.adapters.memory.utils import generate_uuid, now_local
from autoplanner.exceptions import SeedError
from autoplanner.models import CalendarEvent, Priority, Project, Task
from autoplanner.utils.datetime_utils import to_local_naive

_DATETIME_FIELDS = {
    "project": ("created_at", "updated_at"),
    "task": ("due_date", "scheduled_start", "scheduled_end", "created_at", "updated_at"),
    "event": ("start", "end"),
}


@dataclass
class Seed:
    """Initial state for a planner session."""

    projects: list[Project] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    events: list[CalendarEvent] = field(default_factory=list)


SeedProvider = Callable[[], Seed]


def empty_seed() -> Seed:
    return Seed()


def sample_seed(today: date | None = None) -> Seed:
    """Sample projects and tasks laid out relative to ``today``.

    Completed tasks sit in the past, a few open tasks are already scheduled,
    and the rest are waiting for the engine.
    """
    today = today or now_local().date()

    def day(offset: int, hour: int = 9) -> datetime:
        return datetime.combine(today + timedelta(days=offset), time(hour))

    project_rows = [
        ("test-project", "Test Project", "This is a test project to ensure functionality works",
         Priority.HIGH, "#9c27b0", 0),
        ("project-1", "Website Redesign", "Redesign the company website with modern UI/UX principles",
         Priority.HIGH, "#3f51b5", -10),
        ("project-2", "Mobile App Development", "Develop a new mobile app for iOS and Android platforms",
         Priority.URGENT, "#f44336", -7),
        ("project-3", "Marketing Campaign", "Plan and execute Q3 marketing campaign",
         Priority.MEDIUM, "#4caf50", -5),
        ("project-4", "Research Project", "Conduct market research for new product line",
         Priority.LOW, "#ff9800", -3),
    ]
    projects = [
        Project(
            id=pid, title=title, description=desc, priority=prio, color=color,
            created_at=day(created), updated_at=day(created),
        )
        for pid, title, desc, prio, color, created in project_rows
    ]

    # id, title, description, priority, project, hours, completed, auto, due,
    # scheduled (offset, start hour, end hour) or None, created offset
    task_rows = [
        ("task-1", "Create wireframes", "Design wireframes for all main pages",
         Priority.HIGH, "project-1", 4, True, True, 2, (-5, 10, 14), -10),
        ("task-2", "Design mockups", "Create high-fidelity mockups based on wireframes",
         Priority.HIGH, "project-1", 6, False, True, 5, (1, 9, 15), -9),
        ("task-3", "Frontend implementation", "Implement the frontend using React",
         Priority.MEDIUM, "project-1", 8, False, True, 10, None, -8),
        ("task-4", "App architecture design", "Design the architecture for the mobile app",
         Priority.URGENT, "project-2", 3, True, True, -1, (-3, 13, 16), -7),
        ("task-5", "UI/UX design", "Design the user interface and experience",
         Priority.HIGH, "project-2", 5, False, True, 3, (0, 10, 15), -6),
        ("task-6", "iOS development", "Develop the iOS version of the app",
         Priority.MEDIUM, "project-2", 10, False, False, 15, None, -5),
        ("task-7", "Android development", "Develop the Android version of the app",
         Priority.MEDIUM, "project-2", 10, False, False, 15, None, -5),
        ("task-8", "Campaign strategy", "Develop the overall marketing campaign strategy",
         Priority.HIGH, "project-3", 4, True, True, -2, (-4, 9, 13), -5),
        ("task-9", "Content creation", "Create content for social media, email, and website",
         Priority.MEDIUM, "project-3", 6, False, True, 4, None, -4),
        ("task-10", "Campaign launch", "Launch the marketing campaign across all channels",
         Priority.URGENT, "project-3", 2, False, True, 7, None, -3),
        ("task-11", "Survey design", "Design customer survey questions",
         Priority.MEDIUM, "project-4", 3, True, True, -1, (-2, 14, 17), -3),
        ("task-12", "Data collection", "Collect survey responses and market data",
         Priority.MEDIUM, "project-4", 5, False, True, 6, (2, 9, 14), -2),
        ("task-13", "Data analysis", "Analyze collected data and prepare insights",
         Priority.HIGH, "project-4", 4, False, True, 10, None, -1),
        ("task-14", "Final report", "Prepare and present final research report",
         Priority.HIGH, "project-4", 6, False, False, 14, None, -1),
    ]
    tasks = []
    for (tid, title, desc, prio, pid, hours, completed, auto, due, slot, created) in task_rows:
        start = end = None
        if slot is not None:
            offset, start_hour, end_hour = slot
            start, end = day(offset, start_hour), day(offset, end_hour)
        tasks.append(
            Task(
                id=tid, title=title, description=desc, priority=prio, project_id=pid,
                estimated_hours=hours, completed=completed, auto_schedule=auto,
                due_date=day(due), scheduled_start=start, scheduled_end=end,
                created_at=day(created), updated_at=day(created),
            )
        )

    colors = {p.id: p.color for p in projects}
    events = [
        CalendarEvent(
            id=f"event-{t.id}", title=t.title, start=t.scheduled_start,
            end=t.scheduled_end, color=colors[t.project_id],
            task_id=t.id, project_id=t.project_id,
        )
        for t in tasks
        if t.is_scheduled
    ]
    return Seed(projects=projects, tasks=tasks, events=events)


def parse_seed(data: dict[str, Any]) -> Seed:
    """Build a Seed from plain data.

    Missing ids and timestamps are generated; datetimes may be ISO strings and
    are normalized to naive local time.

    Raises:
        SeedError: If the data is not a mapping or an entry is invalid
    """
    if not isinstance(data, dict):
        raise SeedError("Seed must be a mapping with projects/tasks/events lists")

    now = now_local()
    try:
        projects = [
            Project.model_validate(_prepare(row, "project", now))
            for row in data.get("projects") or []
        ]
        tasks = [
            Task.model_validate(_prepare(row, "task", now))
            for row in data.get("tasks") or []
        ]
        events = [
            CalendarEvent.model_validate(_prepare(row, "event", now))
            for row in data.get("events") or []
        ]
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise SeedError(f"Invalid seed data: {e}") from e

    seen_tasks: set[str] = set()
    for event in events:
        if event.task_id is None:
            continue
        if event.task_id in seen_tasks:
            raise SeedError(f"Seed has more than one event for task {event.task_id}")
        seen_tasks.add(event.task_id)

    return Seed(projects=projects, tasks=tasks, events=events)


def load_seed_file(path: str | Path) -> Seed:
    """Load a seed from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        SeedError: If the file is missing, unreadable or malformed
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SeedError(f"Cannot read seed file {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SeedError(f"Cannot parse seed file {path}: {e}") from e

    return parse_seed(data or {})


def file_seed_provider(path: str | Path) -> SeedProvider:
    """Seed provider that re-reads ``path`` on every reset."""
    return lambda: load_seed_file(path)


def _prepare(row: Any, kind: str, now: datetime) -> dict[str, Any]:
    if not isinstance(row, dict):
        raise TypeError(f"{kind} entries must be mappings, got {type(row).__name__}")
    row = dict(row)
    row.setdefault("id", generate_uuid())
    if kind != "event":
        row.setdefault("created_at", now)
        row.setdefault("updated_at", row["created_at"])
    for name in _DATETIME_FIELDS[kind]:
        if row.get(name) is not None:
            row[name] = to_local_naive(row[name])
    return row


def dump_state(state: Any) -> dict[str, list[dict[str, Any]]]:
    """Plain, JSON-friendly dict of a planner state or seed.

    The result has the same shape ``parse_seed`` reads, so a dumped session
    can be saved and used as a seed later.
    """
    return {
        "projects": [p.model_dump(mode="json") for p in state.projects],
        "tasks": [t.model_dump(mode="json") for t in state.tasks],
        "events": [e.model_dump(mode="json") for e in state.events],
    }
