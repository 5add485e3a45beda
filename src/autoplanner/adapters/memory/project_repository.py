"""In-memory implementation of ProjectRepository."""

from __future__ import annotations

from autoplanner.adapters.memory.store import EntityStore
from autoplanner.exceptions import NotFoundError
from autoplanner.models import Project
from autoplanner.repositories import ProjectRepository


class MemoryProjectRepository(ProjectRepository):
    """Project repository backed by an EntityStore."""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_all(self) -> list[Project]:
        return list(self.store.projects.values())

    def get(self, project_id: str) -> Project:
        project = self.store.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def find(self, project_id: str) -> Project | None:
        return self.store.projects.get(project_id)

    def add(self, project: Project) -> Project:
        self.store.projects[project.id] = project
        return project

    def save(self, project: Project) -> Project:
        if project.id not in self.store.projects:
            raise NotFoundError("Project", project.id)
        self.store.projects[project.id] = project
        return project

    def delete(self, project_id: str) -> bool:
        return self.store.projects.pop(project_id, None) is not None
