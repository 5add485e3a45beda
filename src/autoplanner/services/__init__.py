"""Services module for the planner - business logic layer."""

from .availability import AvailabilityChecker
from .event_projector import EventProjector
from .planner_service import PlannerService, PlannerState
from .scheduling_engine import Placement, SchedulingEngine
from .seed import Seed, dump_state, load_seed_file, sample_seed

__all__ = [
    "PlannerService",
    "PlannerState",
    "SchedulingEngine",
    "Placement",
    "EventProjector",
    "AvailabilityChecker",
    "Seed",
    "dump_state",
    "load_seed_file",
    "sample_seed",
]
