"""Scheduling engine - greedy placement of eligible tasks.

The engine makes a single linear pass:

1. keep only eligible candidates (re-read from the store),
2. order them by priority, due date, creation time and store position,
3. anchor a cursor at the later of the next working-day start and the latest
   end of any scheduled, non-completed task,
4. for each task advance the cursor by the buffer, snap starts that fall
   outside working hours to the next day's start, and commit.

There is no backtracking and no conflict detection: placements of one pass
never overlap each other because the cursor only moves forward.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from autoplanner.adapters.memory.utils import now_local
from autoplanner.models import SchedulingConfig, Task
from autoplanner.repositories import TaskRepository
from autoplanner.services.event_projector import EventProjector
from autoplanner.utils.logger import get_logger


@dataclass(frozen=True)
class Placement:
    """A planned interval for one task."""

    task_id: str
    start: datetime
    end: datetime


class SchedulingEngine:
    """Places eligible tasks into working-hours slots."""

    def __init__(
        self,
        task_repository: TaskRepository,
        projector: EventProjector,
        settings: SchedulingConfig | None = None,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        """Initialize the engine.

        Args:
            task_repository: Source of candidates and occupancy
            projector: Writes the event of every committed placement
            settings: Working hours and buffer, defaults to 09:00-17:00 / 30 min
            clock: Returns the current local time
        """
        self.tasks = task_repository
        self.projector = projector
        self.settings = settings or SchedulingConfig()
        self.clock = clock

    @property
    def buffer(self) -> timedelta:
        return timedelta(minutes=self.settings.buffer_minutes)

    def eligible(self, candidates: Iterable[Task] | None = None) -> list[Task]:
        """Current, de-duplicated, eligible versions of the candidates.

        With no candidates, every eligible task in the store is returned.
        """
        if candidates is None:
            return [t for t in self.tasks.list_all() if t.is_eligible]

        seen: set[str] = set()
        result = []
        for candidate in candidates:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            current = self.tasks.find(candidate.id)
            if current is not None and current.is_eligible:
                result.append(current)
        return result

    def order(self, tasks: Iterable[Task]) -> list[Task]:
        """Sort tasks into placement order."""

        def sort_key(task: Task):
            return (
                -task.priority.rank,
                task.due_date is None,
                task.due_date or datetime.min,
                task.created_at,
                self.tasks.position(task.id),
            )

        return sorted(tasks, key=sort_key)

    def anchor(self) -> datetime:
        """Where the cursor starts before the first buffer is added."""
        now = self.clock()
        anchor = now.replace(
            hour=self.settings.work_day_start_hour, minute=0, second=0, microsecond=0
        )
        if anchor < now:
            anchor += timedelta(days=1)

        for task in self.tasks.list_all():
            if task.completed or not task.is_scheduled:
                continue
            if task.scheduled_end > anchor:
                anchor = task.scheduled_end
        return anchor

    def snap_to_working_hours(self, start: datetime) -> datetime:
        """Move a start outside working hours to the next day's first hour."""
        if self.settings.work_day_start_hour <= start.hour < self.settings.work_day_end_hour:
            return start
        next_day = start + timedelta(days=1)
        return next_day.replace(
            hour=self.settings.work_day_start_hour, minute=0, second=0, microsecond=0
        )

    def plan(self, candidates: Iterable[Task] | None = None) -> list[Placement]:
        """Compute placements without touching the store."""
        ordered = self.order(self.eligible(candidates))
        if not ordered:
            return []

        cursor = self.anchor()
        get_logger().debug(
            "planning %d task(s) from anchor %s", len(ordered), cursor.isoformat()
        )

        placements = []
        for task in ordered:
            cursor += self.buffer
            duration = timedelta(hours=task.estimated_hours)
            start = self.snap_to_working_hours(cursor)
            end = start + duration
            placements.append(Placement(task_id=task.id, start=start, end=end))
            cursor = end
        return placements

    def auto_schedule(self, candidates: Iterable[Task] | None = None) -> list[Task]:
        """Place every eligible candidate and materialize its event.

        Args:
            candidates: Tasks to consider, or None for every eligible task

        Returns:
            The placed tasks, in placement order
        """
        placed = [self.commit(p) for p in self.plan(candidates)]
        if placed:
            get_logger().info("auto-scheduled %d task(s)", len(placed))
        return placed

    def commit(self, placement: Placement) -> Task:
        """Write one placement to the task and its event."""
        task = self.tasks.get(placement.task_id)
        task = self.tasks.save(
            task.model_copy(
                update={
                    "scheduled_start": placement.start,
                    "scheduled_end": placement.end,
                    "updated_at": self.clock(),
                }
            )
        )
        self.projector.sync(task)
        get_logger().debug(
            "placed task %s at %s - %s",
            task.id,
            placement.start.isoformat(),
            placement.end.isoformat(),
        )
        return task
