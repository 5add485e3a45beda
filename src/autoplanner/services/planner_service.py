"""Planner service - the mutation API over a planner session.

The service is the only writer of the session's projects, tasks and events.
Every public mutation runs to completion synchronously, then notifies
subscribers once with a fresh snapshot.

Re-scheduling is two-phase: the direct mutation is applied first, then the
resulting eligible set gets one bounded engine pass. Engine placements write
through the engine's own commit and never start another pass; a pass that is
already running also short-circuits any nested trigger.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from autoplanner.adapters.memory import (
    EntityStore,
    MemoryEventRepository,
    MemoryProjectRepository,
    MemoryTaskRepository,
)
from autoplanner.adapters.memory.utils import generate_uuid, now_local
from autoplanner.exceptions import SchedulingConflictError, ValidationError
from autoplanner.models import (
    CalendarEvent,
    Priority,
    Project,
    ProjectCreate,
    ProjectUpdate,
    SchedulingConfig,
    Task,
    TaskCreate,
    TaskUpdate,
)
from autoplanner.services.availability import AvailabilityChecker
from autoplanner.services.event_projector import EventProjector
from autoplanner.services.scheduling_engine import SchedulingEngine
from autoplanner.services.seed import Seed, SeedProvider, empty_seed
from autoplanner.utils.datetime_utils import to_local_naive
from autoplanner.utils.logger import get_logger

_TASK_DATETIME_FIELDS = ("due_date", "scheduled_start", "scheduled_end")


@dataclass(frozen=True)
class PlannerState:
    """Snapshot of a session, safe to hand to views."""

    projects: list[Project]
    tasks: list[Task]
    events: list[CalendarEvent]


Listener = Callable[[PlannerState], None]


class PlannerService:
    """Mutation API for projects, tasks and their calendar events."""

    def __init__(
        self,
        settings: SchedulingConfig | None = None,
        *,
        seed: SeedProvider | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        """Initialize the service and load the seed.

        Args:
            settings: Scheduling configuration
            seed: Provider of the initial state, also used by ``reset``
            clock: Returns the current local time
        """
        self.settings = settings or SchedulingConfig()
        self.clock = clock
        self._seed = seed or empty_seed

        self.store = EntityStore()
        self.projects = MemoryProjectRepository(self.store)
        self.tasks = MemoryTaskRepository(self.store)
        self.events = MemoryEventRepository(self.store)

        self.projector = EventProjector(
            self.events, self.projects, self.settings.default_event_color
        )
        self.availability = AvailabilityChecker(self.events)
        self.engine = SchedulingEngine(
            self.tasks, self.projector, self.settings, clock=clock
        )

        self._listeners: list[Listener] = []
        self._in_pass = False
        self._load(self._seed())

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def state(self) -> PlannerState:
        """Copy of the current projects, tasks and events."""
        return PlannerState(
            projects=[p.model_copy() for p in self.projects.list_all()],
            tasks=[t.model_copy() for t in self.tasks.list_all()],
            events=[e.model_copy() for e in self.events.list_all()],
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every mutation.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_project(self, project_id: str) -> Project:
        return self.projects.get(project_id)

    def get_task(self, task_id: str) -> Task:
        return self.tasks.get(task_id)

    def get_event_for_task(self, task_id: str) -> CalendarEvent | None:
        return self.events.get_by_task(task_id)

    def is_available(self, start: datetime, end: datetime) -> bool:
        """Whether ``[start, end)`` overlaps no existing event."""
        return self.availability.is_available(_as_local(start), _as_local(end))

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def add_project(
        self,
        title: str,
        *,
        description: str = "",
        priority: Priority | str = Priority.MEDIUM,
        color: str | None = None,
    ) -> Project:
        """Create a project."""
        data = _validate(
            ProjectCreate,
            title=title,
            description=description,
            priority=priority,
            color=color or self.settings.default_event_color,
        )
        now = self.clock()
        project = self.projects.add(
            Project(id=generate_uuid(), created_at=now, updated_at=now, **data.model_dump())
        )
        get_logger().info("project added: %s", project.id)
        self._notify()
        return project

    def update_project(
        self,
        project_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        priority: Priority | str | None = None,
        color: str | None = None,
    ) -> Project:
        """Merge the given fields into a project.

        A color change is applied to the events of the project's tasks.
        """
        current = self.projects.get(project_id)
        updates = _validate(
            ProjectUpdate,
            title=title,
            description=description,
            priority=priority,
            color=color,
        )
        changes = updates.model_dump(exclude_none=True)
        project = self.projects.save(
            current.model_copy(update={**changes, "updated_at": self.clock()})
        )
        if project.color != current.color:
            self.projector.recolor(project)
        get_logger().info("project updated: %s", project_id)
        self._notify()
        return project

    def delete_project(self, project_id: str) -> None:
        """Delete a project with all of its tasks and events."""
        self.projects.get(project_id)
        for task in self.tasks.list_by_project(project_id):
            self.projector.remove(task.id)
            self.tasks.delete(task.id)
        self.events.delete_by_project(project_id)
        self.projects.delete(project_id)
        get_logger().info("project deleted: %s", project_id)
        self._notify()

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(
        self,
        title: str,
        *,
        project_id: str,
        description: str = "",
        priority: Priority | str = Priority.MEDIUM,
        estimated_hours: float = 1.0,
        auto_schedule: bool = True,
        locked: bool = False,
        completed: bool = False,
        due_date: datetime | str | None = None,
        scheduled_start: datetime | str | None = None,
        scheduled_end: datetime | str | None = None,
    ) -> Task:
        """Create a task and, if it is eligible, place it right away.

        A task created with a schedule is treated as manually placed: it is
        locked and gets its event immediately.

        Returns:
            The stored task, including any placement made by the engine
        """
        data = _validate(
            TaskCreate,
            title=title,
            project_id=project_id,
            description=description,
            priority=priority,
            estimated_hours=estimated_hours,
            auto_schedule=auto_schedule,
            locked=locked,
            completed=completed,
            due_date=_as_local(due_date),
            scheduled_start=_as_local(scheduled_start),
            scheduled_end=_as_local(scheduled_end),
        )
        now = self.clock()
        task = Task(id=generate_uuid(), created_at=now, updated_at=now, **data.model_dump())
        if task.is_scheduled:
            self._check_manual_overlap(task.id, task.scheduled_start, task.scheduled_end)
            task = task.model_copy(update={"locked": True})

        self.tasks.add(task)
        self.projector.sync(task)
        get_logger().info("task added: %s", task.id)

        if task.is_eligible:
            self._run_pass([task])
        self._notify()
        return self.tasks.get(task.id)

    def update_task(self, task_id: str, **changes: object) -> Task:
        """Merge the given fields into a task.

        Only keyword arguments actually passed are applied. A schedule that
        differs from the stored one locks the task; clearing the schedule
        removes its event. When the schedule changed and the task is left
        unlocked, every other eligible task is placed.
        """
        current = self.tasks.get(task_id)
        for name in _TASK_DATETIME_FIELDS:
            if name in changes:
                changes[name] = _as_local(changes[name])
        updates = _validate(TaskUpdate, **changes)
        fields = updates.changes()

        schedule_changed = updates.touches_schedule and (
            fields["scheduled_start"] != current.scheduled_start
            or fields["scheduled_end"] != current.scheduled_end
        )
        task = current.model_copy(update={**fields, "updated_at": self.clock()})
        if schedule_changed and task.is_scheduled:
            self._check_manual_overlap(task.id, task.scheduled_start, task.scheduled_end)
            task = task.model_copy(update={"locked": True})

        self.tasks.save(task)
        self.projector.sync(task)
        get_logger().info(
            "task updated: %s (fields=%s)", task_id, ",".join(sorted(fields))
        )

        if schedule_changed and not task.locked:
            self._run_pass(self._other_tasks(task_id))
        self._notify()
        return self.tasks.get(task_id)

    def delete_task(self, task_id: str) -> None:
        """Delete a task and its event."""
        self.tasks.get(task_id)
        self.projector.remove(task_id)
        self.tasks.delete(task_id)
        get_logger().info("task deleted: %s", task_id)
        self._notify()

    def schedule_task(
        self,
        task_id: str,
        start: datetime | str,
        end: datetime | str,
        *,
        suppress_retrigger: bool = False,
    ) -> Task:
        """Place a task at exactly ``[start, end)`` and lock it.

        Args:
            task_id: Task to place
            start: Interval start
            end: Interval end, not before start
            suppress_retrigger: Skip placing the other eligible tasks

        Raises:
            NotFoundError: If the task does not exist
            ValidationError: If end is before start
            SchedulingConflictError: If manual overlaps are rejected by
                configuration and the interval is taken
        """
        current = self.tasks.get(task_id)
        start, end = _as_local(start), _as_local(end)
        if end < start:
            raise ValidationError("scheduled_end must not be before scheduled_start")
        self._check_manual_overlap(task_id, start, end)

        task = self.tasks.save(
            current.model_copy(
                update={
                    "scheduled_start": start,
                    "scheduled_end": end,
                    "locked": True,
                    "updated_at": self.clock(),
                }
            )
        )
        self.projector.sync(task)
        get_logger().info("task scheduled manually: %s", task_id)

        if not suppress_retrigger:
            self._run_pass(self._other_tasks(task_id))
        self._notify()
        return self.tasks.get(task_id)

    def unschedule_task(self, task_id: str) -> Task:
        """Clear a task's interval and remove its event.

        The lock flag is left as it is, so a locked task stays out of the
        engine's reach until it is unlocked.
        """
        current = self.tasks.get(task_id)
        task = self.tasks.save(
            current.model_copy(
                update={
                    "scheduled_start": None,
                    "scheduled_end": None,
                    "updated_at": self.clock(),
                }
            )
        )
        self.projector.sync(task)
        get_logger().info("task unscheduled: %s", task_id)
        self._notify()
        return task

    def complete_task(self, task_id: str) -> Task:
        return self._set_flag(task_id, "completed", True)

    def reopen_task(self, task_id: str) -> Task:
        return self._set_flag(task_id, "completed", False)

    def toggle_task_auto_schedule(self, task_id: str) -> Task:
        """Flip ``auto_schedule``; takes effect on the next pass."""
        current = self.tasks.get(task_id)
        return self._set_flag(task_id, "auto_schedule", not current.auto_schedule)

    def toggle_task_lock(self, task_id: str) -> Task:
        """Flip ``locked``. Unlocking places every eligible task."""
        current = self.tasks.get(task_id)
        unlocking = current.locked
        task = self.tasks.save(
            current.model_copy(update={"locked": not unlocking, "updated_at": self.clock()})
        )
        get_logger().info("task %s: %s", "unlocked" if unlocking else "locked", task_id)

        if unlocking:
            self._run_pass(None)
        self._notify()
        return self.tasks.get(task.id)

    def auto_schedule_tasks(self) -> list[Task]:
        """Place every eligible task in one pass.

        Returns:
            The placed tasks, in placement order
        """
        placed = self._run_pass(None)
        self._notify()
        return placed

    def reset(self) -> PlannerState:
        """Discard the session and reload the seed."""
        self._load(self._seed())
        get_logger().info("planner reset: %s", self.store.counts())
        self._notify()
        return self.state()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, seed: Seed) -> None:
        self.store.load(seed.projects, seed.tasks, seed.events)
        for task in self.tasks.list_all():
            self.projector.sync(task)

    def _other_tasks(self, task_id: str) -> list[Task]:
        return [t for t in self.tasks.list_all() if t.id != task_id]

    def _run_pass(self, candidates: list[Task] | None) -> list[Task]:
        if self._in_pass:
            get_logger().debug("scheduling pass already running, trigger ignored")
            return []
        self._in_pass = True
        try:
            return self.engine.auto_schedule(candidates)
        finally:
            self._in_pass = False

    def _set_flag(self, task_id: str, name: str, value: bool) -> Task:
        current = self.tasks.get(task_id)
        task = self.tasks.save(
            current.model_copy(update={name: value, "updated_at": self.clock()})
        )
        get_logger().info("task %s set %s=%s", task_id, name, value)
        self._notify()
        return task

    def _check_manual_overlap(self, task_id: str, start: datetime, end: datetime) -> None:
        if not self.settings.reject_manual_overlap:
            return
        conflicts = self.availability.conflicts(start, end, ignore_task_id=task_id)
        if conflicts:
            titles = ", ".join(e.title for e in conflicts)
            raise SchedulingConflictError(
                f"Interval overlaps existing events: {titles}", conflicts
            )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                get_logger().exception("state listener %r failed", listener)


def _validate(model: type[BaseModel], **data: object):
    """Build an input model, translating pydantic errors to ValidationError."""
    try:
        return model(**data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or model.__name__}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(details) from e


def _as_local(value: datetime | str | None) -> datetime | None:
    try:
        return to_local_naive(value)
    except ValueError as e:
        raise ValidationError(f"Invalid datetime {value!r}: {e}") from e
