"""In-memory storage adapter.

Holds the planner's state for the lifetime of a session.
"""

from .event_repository import MemoryEventRepository
from .project_repository import MemoryProjectRepository
from .store import EntityStore
from .task_repository import MemoryTaskRepository

__all__ = [
    "EntityStore",
    "MemoryProjectRepository",
    "MemoryTaskRepository",
    "MemoryEventRepository",
]
