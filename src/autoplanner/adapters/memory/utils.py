"""Utility functions for the memory adapter."""

from __future__ import annotations

import uuid
from datetime import datetime


def generate_uuid() -> str:
    """Generate a new UUID as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-12d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def now_local() -> datetime:
    """Current local wall-clock time, naive, truncated to the second."""
    return datetime.now().replace(microsecond=0)
