"""In-memory implementation of EventRepository."""

from __future__ import annotations

from autoplanner.adapters.memory.store import EntityStore
from autoplanner.models import CalendarEvent
from autoplanner.repositories import EventRepository


class MemoryEventRepository(EventRepository):
    """Event repository backed by an EntityStore."""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_all(self) -> list[CalendarEvent]:
        return list(self.store.events.values())

    def get_by_task(self, task_id: str) -> CalendarEvent | None:
        for event in self.store.events.values():
            if event.task_id == task_id:
                return event
        return None

    def add(self, event: CalendarEvent) -> CalendarEvent:
        self.store.events[event.id] = event
        return event

    def save(self, event: CalendarEvent) -> CalendarEvent:
        self.store.events[event.id] = event
        return event

    def delete_by_task(self, task_id: str) -> int:
        return self._delete_where(lambda e: e.task_id == task_id)

    def delete_by_project(self, project_id: str) -> int:
        return self._delete_where(lambda e: e.project_id == project_id)

    def _delete_where(self, predicate) -> int:
        doomed = [eid for eid, e in self.store.events.items() if predicate(e)]
        for event_id in doomed:
            del self.store.events[event_id]
        return len(doomed)
