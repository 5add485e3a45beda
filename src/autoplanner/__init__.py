"""Auto-scheduling planner for projects and tasks."""

__version__ = "0.3.0"
