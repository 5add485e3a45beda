"""Exceptions raised by the planner core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autoplanner.models import CalendarEvent


class PlannerError(Exception):
    """Base exception for planner errors."""


class NotFoundError(PlannerError):
    """Raised when a task, project or event id does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class ValidationError(PlannerError, ValueError):
    """Raised when caller input is rejected before touching the store."""


class SchedulingConflictError(PlannerError):
    """Raised when a manual placement overlaps existing events."""

    def __init__(self, message: str, conflicts: list[CalendarEvent] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


class SeedError(PlannerError):
    """Raised when seed data cannot be read or parsed."""
