"""Availability check models - conflicts between a plan and venue hours."""

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from backend.app.models.common import (
    AvailabilityStatus,
    CamelModel,
    ConflictSeverity,
    ConflictType,
)
from backend.app.utils.timeparse import parse_clock


class Conflict(CamelModel):
    """A scheduling problem detected for a plan.

    Conflicts are recomputed on every check and never merged with earlier runs.
    """

    type: ConflictType
    message: str
    suggestion: str
    severity: ConflictSeverity
    suggested_time: str | None = None  # "HH:MM", only for restaurant_closing


class AvailabilityResult(CamelModel):
    """Outcome of an availability check."""

    status: AvailabilityStatus
    conflicts: list[Conflict] = Field(default_factory=list)


class CheckAvailabilityRequest(CamelModel):
    """Request body for POST /availability/check."""

    restaurant_id: str | None = None
    activity_id: str | None = None
    # Raw provider payloads; anything unusable degrades to "no hours data"
    restaurant_hours: Any = None
    activity_hours: Any = None
    scheduled_date: date
    scheduled_time: str
    scheduled_plan_id: UUID | None = None

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Reject malformed wall-clock times up front."""
        parse_clock(v)
        return v


class CheckAvailabilityResponse(AvailabilityResult):
    """Response for POST /availability/check."""

    restaurant_hours: list[str] = Field(default_factory=list)
    activity_hours: list[str] = Field(default_factory=list)
