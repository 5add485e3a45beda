"""Configuration models for the planner.

These models are loaded from and saved to ``config.json`` by
``autoplanner.services.config_service.ConfigService``.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from .core import DEFAULT_EVENT_COLOR

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class SchedulingConfig(BaseModel):
    """Scheduling engine configuration."""

    work_day_start_hour: int = Field(default=9, ge=0, le=23)
    work_day_end_hour: int = Field(default=17, ge=1, le=24)
    buffer_minutes: int = Field(default=30, ge=0)
    default_event_color: str = Field(default=DEFAULT_EVENT_COLOR)
    reject_manual_overlap: bool = Field(
        default=False,
        description="Reject manual placements that overlap existing events",
    )

    @field_validator("default_event_color")
    @classmethod
    def _hex_color(cls, value: str) -> str:
        if not _HEX_COLOR.match(value):
            raise ValueError(f"Invalid color '{value}', expected #rrggbb")
        return value

    @model_validator(mode="after")
    def _window_order(self) -> SchedulingConfig:
        if self.work_day_start_hour >= self.work_day_end_hour:
            raise ValueError("work_day_start_hour must be before work_day_end_hour")
        return self


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Root configuration model."""

    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    seed_file: str | None = Field(
        default=None, description="JSON/YAML seed loaded on startup and reset"
    )
