"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real log and config
directories, and a planner service running on a fixed clock.
"""

from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from autoplanner.adapters.memory.utils import generate_uuid
from autoplanner.models import Priority, SchedulingConfig, Task
from autoplanner.services.planner_service import PlannerService

# Monday, one hour before the working day starts
FIXED_NOW = datetime(2024, 6, 3, 8, 0)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Send log output to tmp_path and reset the logger singleton."""
    import autoplanner.utils.logger as logger_mod

    logger_mod._logger = None
    with patch("autoplanner.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger = logging.getLogger("autoplanner")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def isolate_config(tmp_path):
    """Keep config.json inside tmp_path and give every test a fresh service."""
    from autoplanner.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "autoplanner.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        yield
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Planner fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def service(clock):
    """Empty planner session with default settings."""
    return PlannerService(clock=clock)


@pytest.fixture()
def project(service):
    return service.add_project("Website", color="#3f51b5")


def make_task(
    task_id: str | None = None,
    *,
    title: str = "Task",
    priority: Priority = Priority.MEDIUM,
    project_id: str = "project-1",
    estimated_hours: float = 1.0,
    created_at: datetime = FIXED_NOW,
    **fields,
) -> Task:
    """Build a Task entity directly, bypassing service validation."""
    return Task(
        id=task_id or generate_uuid(),
        title=title,
        priority=priority,
        project_id=project_id,
        estimated_hours=estimated_hours,
        created_at=created_at,
        updated_at=created_at,
        **fields,
    )


@pytest.fixture()
def strict_settings():
    return SchedulingConfig(reject_manual_overlap=True)


@pytest.fixture()
def task_factory():
    """Factory for Task entities; see ``make_task``."""
    return make_task
