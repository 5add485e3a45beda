"""Core planner models.

Entities (Project, Task, CalendarEvent) are what the store holds. The
``*Create`` / ``*Update`` models validate caller input at the service boundary;
the entities themselves accept any value so the scheduling engine can be
exercised with degenerate data.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_EVENT_COLOR = "#3788d8"
HOURS_GRANULARITY = 0.5
_CLEARABLE_TASK_FIELDS = frozenset({"due_date", "scheduled_start", "scheduled_end"})


class Priority(str, Enum):
    """Task and project priority levels."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        """Numeric rank, higher is more important."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.URGENT: 3,
}


class Project(BaseModel):
    """Project model.

    Attributes:
        id: Unique identifier for the project
        title: Project title
        description: Free-form description
        priority: Project priority (informational, tasks carry their own)
        color: Hex color used for the events of the project's tasks
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    color: str = DEFAULT_EVENT_COLOR
    created_at: datetime
    updated_at: datetime


class ProjectCreate(BaseModel):
    """Model for creating a new project."""

    model_config = ConfigDict(extra="forbid")

    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    color: str = DEFAULT_EVENT_COLOR

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _require_title(value)


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    All fields are optional - only provided fields will be updated.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    color: str | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        return None if value is None else _require_title(value)


class Task(BaseModel):
    """Task model.

    Attributes:
        id: Unique identifier for the task
        title: Task title, mirrored onto its calendar event
        description: Free-form description
        priority: Priority level used for placement order
        project_id: Owning project
        estimated_hours: Planned duration in hours
        completed: Completion status
        auto_schedule: Whether the engine may place this task
        locked: Whether the current schedule is protected from the engine
        due_date: Optional due date, earlier dates are placed first
        scheduled_start: Start of the scheduled interval
        scheduled_end: End of the scheduled interval
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    project_id: str
    estimated_hours: float
    completed: bool = False
    auto_schedule: bool = True
    locked: bool = False
    due_date: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_start is not None and self.scheduled_end is not None

    @property
    def is_eligible(self) -> bool:
        """Whether the engine may place this task on its next pass."""
        return (
            not self.completed
            and self.auto_schedule
            and not self.locked
            and not self.is_scheduled
        )


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, non-blank)
        description: Optional description
        priority: Priority level
        project_id: Owning project ID
        estimated_hours: Duration, at least 0.5h in 0.5h steps
        auto_schedule: Let the engine place the task (default True)
        locked: Protect the schedule from the engine (default False)
        completed: Create the task already completed
        due_date: Optional due date
        scheduled_start: Optional initial start, requires scheduled_end
        scheduled_end: Optional initial end, requires scheduled_start
    """

    model_config = ConfigDict(extra="forbid")

    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    project_id: str
    estimated_hours: float = 1.0
    auto_schedule: bool = True
    locked: bool = False
    completed: bool = False
    due_date: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _require_title(value)

    @field_validator("estimated_hours")
    @classmethod
    def _hours_granular(cls, value: float) -> float:
        return _require_hours(value)

    @model_validator(mode="after")
    def _schedule_pair(self) -> TaskCreate:
        _require_schedule_pair(self.scheduled_start, self.scheduled_end)
        return self


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields explicitly passed are applied. Passing ``scheduled_start=None``
    and ``scheduled_end=None`` clears the schedule; omitting them leaves it
    untouched.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    project_id: str | None = None
    estimated_hours: float | None = None
    auto_schedule: bool | None = None
    locked: bool | None = None
    completed: bool | None = None
    due_date: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        return None if value is None else _require_title(value)

    @field_validator("estimated_hours")
    @classmethod
    def _hours_granular(cls, value: float | None) -> float | None:
        return None if value is None else _require_hours(value)

    @model_validator(mode="after")
    def _schedule_pair(self) -> TaskUpdate:
        given = {"scheduled_start", "scheduled_end"} & self.model_fields_set
        if len(given) == 1:
            raise ValueError(
                "scheduled_start and scheduled_end must be updated together"
            )
        _require_schedule_pair(self.scheduled_start, self.scheduled_end)
        return self

    @property
    def touches_schedule(self) -> bool:
        return "scheduled_start" in self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Explicitly passed fields; None only clears the nullable ones."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in _CLEARABLE_TASK_FIELDS
        }


class CalendarEvent(BaseModel):
    """Calendar event derived from a scheduled task.

    Attributes:
        id: Unique identifier for the event
        title: Mirrors the task title
        start: Interval start (inclusive)
        end: Interval end (exclusive)
        all_day: All-day flag, never set by the engine
        color: Display color inherited from the project
        task_id: Back-reference to the task (lookup only)
        project_id: Back-reference to the project (lookup only)
    """

    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    color: str = DEFAULT_EVENT_COLOR
    task_id: str | None = None
    project_id: str | None = None

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open overlap test against ``[start, end)``."""
        return start < self.end and self.start < end


def _require_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("title must not be empty")
    return value


def _require_hours(value: float) -> float:
    if value < HOURS_GRANULARITY:
        raise ValueError(f"estimated_hours must be at least {HOURS_GRANULARITY}")
    if not (value / HOURS_GRANULARITY).is_integer():
        raise ValueError(f"estimated_hours must be a multiple of {HOURS_GRANULARITY}")
    return value


def _require_schedule_pair(start: datetime | None, end: datetime | None) -> None:
    if (start is None) != (end is None):
        raise ValueError("scheduled_start and scheduled_end must both be set or unset")
    if start is not None and end is not None and end < start:
        raise ValueError("scheduled_end must not be before scheduled_start")
