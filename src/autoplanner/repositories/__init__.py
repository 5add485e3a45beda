"""Repository interfaces for the planner.

This package contains abstract base classes (ABCs) that define the contracts
for the entity collections. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- autoplanner.adapters.memory (in-process session store)
"""

from .repository import (
    EventRepository,
    ProjectRepository,
    TaskRepository,
)

__all__ = [
    "TaskRepository",
    "ProjectRepository",
    "EventRepository",
]
