"""Availability checker - overlap queries against the calendar."""

from __future__ import annotations

from datetime import datetime

from autoplanner.models import CalendarEvent
from autoplanner.repositories import EventRepository


class AvailabilityChecker:
    """Answers whether a candidate interval is free.

    Intervals are half-open: ``[s1, e1)`` and ``[s2, e2)`` overlap iff
    ``s1 < e2 and s2 < e1``, so back-to-back events do not conflict.
    """

    def __init__(self, event_repository: EventRepository):
        self.events = event_repository

    def conflicts(
        self,
        start: datetime,
        end: datetime,
        *,
        ignore_task_id: str | None = None,
    ) -> list[CalendarEvent]:
        """Return the events overlapping ``[start, end)``.

        Args:
            start: Candidate start
            end: Candidate end
            ignore_task_id: Skip the event of this task (a task being moved
                never conflicts with its own current slot)
        """
        return [
            event
            for event in self.events.list_all()
            if not (ignore_task_id is not None and event.task_id == ignore_task_id)
            and event.overlaps(start, end)
        ]

    def is_available(
        self,
        start: datetime,
        end: datetime,
        *,
        ignore_task_id: str | None = None,
    ) -> bool:
        return not self.conflicts(start, end, ignore_task_id=ignore_task_id)
