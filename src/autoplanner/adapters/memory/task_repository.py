"""In-memory implementation of TaskRepository."""

from __future__ import annotations

from autoplanner.adapters.memory.store import EntityStore
from autoplanner.exceptions import NotFoundError
from autoplanner.models import Task
from autoplanner.repositories import TaskRepository


class MemoryTaskRepository(TaskRepository):
    """Task repository backed by an EntityStore."""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_all(self) -> list[Task]:
        return list(self.store.tasks.values())

    def list_by_project(self, project_id: str) -> list[Task]:
        return [t for t in self.store.tasks.values() if t.project_id == project_id]

    def get(self, task_id: str) -> Task:
        task = self.store.tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def find(self, task_id: str) -> Task | None:
        return self.store.tasks.get(task_id)

    def position(self, task_id: str) -> int:
        for index, stored_id in enumerate(self.store.tasks):
            if stored_id == task_id:
                return index
        raise NotFoundError("Task", task_id)

    def add(self, task: Task) -> Task:
        self.store.tasks[task.id] = task
        return task

    def save(self, task: Task) -> Task:
        if task.id not in self.store.tasks:
            raise NotFoundError("Task", task.id)
        self.store.tasks[task.id] = task
        return task

    def delete(self, task_id: str) -> bool:
        return self.store.tasks.pop(task_id, None) is not None
