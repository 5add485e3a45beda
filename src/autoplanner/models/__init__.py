"""Planner domain models.

This package contains the Pydantic models for the planner's entities
(projects, tasks, calendar events), their create/update payloads, and the
application configuration.
"""

from .config_models import AppConfig, OutputConfig, SchedulingConfig
from .core import (
    DEFAULT_EVENT_COLOR,
    CalendarEvent,
    Priority,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
)

__all__ = [
    "DEFAULT_EVENT_COLOR",
    "Priority",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Event model
    "CalendarEvent",
    # Config models
    "AppConfig",
    "SchedulingConfig",
    "OutputConfig",
]
