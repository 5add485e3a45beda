"""Repository abstraction layer for the planner.

This module defines the abstract base classes (interfaces) for the three
entity collections, following the hexagonal architecture (Ports & Adapters)
pattern. The in-memory adapter lives in ``autoplanner.adapters.memory``.

Repositories are plain storage: they never trigger scheduling and never
cascade. Business rules belong to ``autoplanner.services``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from autoplanner.models import CalendarEvent, Project, Task


class ProjectRepository(ABC):
    """Abstract base class for project storage."""

    @abstractmethod
    def list_all(self) -> list[Project]:
        """List projects in insertion order."""
        raise NotImplementedError(
            "ProjectRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    def get(self, project_id: str) -> Project:
        """Get a project by ID.

        Raises:
            NotFoundError: If the project does not exist
        """
        raise NotImplementedError("ProjectRepository.get() must be implemented by adapter")

    @abstractmethod
    def find(self, project_id: str) -> Project | None:
        """Get a project by ID, or None if it does not exist."""
        raise NotImplementedError("ProjectRepository.find() must be implemented by adapter")

    @abstractmethod
    def add(self, project: Project) -> Project:
        """Append a new project."""
        raise NotImplementedError("ProjectRepository.add() must be implemented by adapter")

    @abstractmethod
    def save(self, project: Project) -> Project:
        """Replace a stored project, keeping its position.

        Raises:
            NotFoundError: If the project does not exist
        """
        raise NotImplementedError("ProjectRepository.save() must be implemented by adapter")

    @abstractmethod
    def delete(self, project_id: str) -> bool:
        """Remove a project. Returns False if it did not exist."""
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )


class TaskRepository(ABC):
    """Abstract base class for task storage."""

    @abstractmethod
    def list_all(self) -> list[Task]:
        """List tasks in insertion order."""
        raise NotImplementedError("TaskRepository.list_all() must be implemented by adapter")

    @abstractmethod
    def list_by_project(self, project_id: str) -> list[Task]:
        """List the tasks owned by a project, in insertion order."""
        raise NotImplementedError(
            "TaskRepository.list_by_project() must be implemented by adapter"
        )

    @abstractmethod
    def get(self, task_id: str) -> Task:
        """Get a task by ID.

        Raises:
            NotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    def find(self, task_id: str) -> Task | None:
        """Get a task by ID, or None if it does not exist."""
        raise NotImplementedError("TaskRepository.find() must be implemented by adapter")

    @abstractmethod
    def position(self, task_id: str) -> int:
        """Insertion index of a task, used as the last-resort sort key."""
        raise NotImplementedError(
            "TaskRepository.position() must be implemented by adapter"
        )

    @abstractmethod
    def add(self, task: Task) -> Task:
        """Append a new task."""
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Replace a stored task, keeping its position.

        Raises:
            NotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskRepository.save() must be implemented by adapter")

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Remove a task. Returns False if it did not exist."""
        raise NotImplementedError("TaskRepository.delete() must be implemented by adapter")


class EventRepository(ABC):
    """Abstract base class for calendar event storage.

    At most one event per task is expected; ``get_by_task`` returns the first
    match in insertion order.
    """

    @abstractmethod
    def list_all(self) -> list[CalendarEvent]:
        """List events in insertion order."""
        raise NotImplementedError(
            "EventRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    def get_by_task(self, task_id: str) -> CalendarEvent | None:
        """Get the event of a task, or None."""
        raise NotImplementedError(
            "EventRepository.get_by_task() must be implemented by adapter"
        )

    @abstractmethod
    def add(self, event: CalendarEvent) -> CalendarEvent:
        """Append a new event."""
        raise NotImplementedError("EventRepository.add() must be implemented by adapter")

    @abstractmethod
    def save(self, event: CalendarEvent) -> CalendarEvent:
        """Replace a stored event, keeping its position."""
        raise NotImplementedError("EventRepository.save() must be implemented by adapter")

    @abstractmethod
    def delete_by_task(self, task_id: str) -> int:
        """Remove every event referencing a task. Returns the count removed."""
        raise NotImplementedError(
            "EventRepository.delete_by_task() must be implemented by adapter"
        )

    @abstractmethod
    def delete_by_project(self, project_id: str) -> int:
        """Remove every event referencing a project. Returns the count removed."""
        raise NotImplementedError(
            "EventRepository.delete_by_project() must be implemented by adapter"
        )
