"""Event projector - keeps one calendar event per scheduled task."""

from __future__ import annotations

from autoplanner.adapters.memory.utils import generate_uuid
from autoplanner.models import DEFAULT_EVENT_COLOR, CalendarEvent, Project, Task
from autoplanner.repositories import EventRepository, ProjectRepository


class EventProjector:
    """Derives CalendarEvents from task schedules.

    Events are keyed by ``task_id``: syncing a scheduled task updates its
    existing event in place (same id, same position) or creates one; syncing
    an unscheduled task removes it.
    """

    def __init__(
        self,
        event_repository: EventRepository,
        project_repository: ProjectRepository,
        default_color: str = DEFAULT_EVENT_COLOR,
    ):
        self.events = event_repository
        self.projects = project_repository
        self.default_color = default_color

    def color_for(self, project_id: str | None) -> str:
        """Project color, or the default when the project is missing."""
        project = self.projects.find(project_id) if project_id else None
        return project.color if project is not None else self.default_color

    def sync(self, task: Task) -> CalendarEvent | None:
        """Bring the task's event in line with its current schedule.

        Returns:
            The upserted event, or None when the task is unscheduled
        """
        if not task.is_scheduled:
            self.events.delete_by_task(task.id)
            return None

        fields = {
            "title": task.title,
            "start": task.scheduled_start,
            "end": task.scheduled_end,
            "color": self.color_for(task.project_id),
            "task_id": task.id,
            "project_id": task.project_id,
        }
        existing = self.events.get_by_task(task.id)
        if existing is not None:
            return self.events.save(existing.model_copy(update=fields))
        return self.events.add(CalendarEvent(id=generate_uuid(), **fields))

    def remove(self, task_id: str) -> int:
        """Drop the event of a task. Returns the number of events removed."""
        return self.events.delete_by_task(task_id)

    def recolor(self, project: Project) -> int:
        """Apply a project's color to every event that references it."""
        updated = 0
        for event in self.events.list_all():
            if event.project_id == project.id and event.color != project.color:
                self.events.save(event.model_copy(update={"color": project.color}))
                updated += 1
        return updated
