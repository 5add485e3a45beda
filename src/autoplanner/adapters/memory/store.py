"""In-memory entity store shared by the memory repositories."""

from __future__ import annotations

from collections.abc import Iterable

from autoplanner.models import CalendarEvent, Project, Task


class EntityStore:
    """Three insertion-ordered collections keyed by entity id.

    The store lives for one planner session. Nothing is written to disk;
    ``load`` replaces the contents with a seed and ``clear`` empties it.
    """

    def __init__(self) -> None:
        self.projects: dict[str, Project] = {}
        self.tasks: dict[str, Task] = {}
        self.events: dict[str, CalendarEvent] = {}

    def clear(self) -> None:
        self.projects.clear()
        self.tasks.clear()
        self.events.clear()

    def load(
        self,
        projects: Iterable[Project] = (),
        tasks: Iterable[Task] = (),
        events: Iterable[CalendarEvent] = (),
    ) -> None:
        """Replace all contents, keeping the given order."""
        self.clear()
        self.projects.update((p.id, p) for p in projects)
        self.tasks.update((t.id, t) for t in tasks)
        self.events.update((e.id, e) for e in events)

    def counts(self) -> dict[str, int]:
        return {
            "projects": len(self.projects),
            "tasks": len(self.tasks),
            "events": len(self.events),
        }
