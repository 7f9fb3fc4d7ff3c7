"""Scheduled plan models - a restaurant + activity pinned to a date."""

from datetime import date, datetime, time
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from backend.app.models.availability import Conflict
from backend.app.models.common import AvailabilityStatus, PlanStatus, SearchMode
from backend.app.utils.timeparse import parse_clock

BAD_WEATHER_CONDITIONS = frozenset({"rain", "snow"})


def _coerce_clock(v: Any) -> Any:
    """Accept "H:MM" as well as ISO times."""
    if isinstance(v, str):
        hour, minute = parse_clock(v)
        return time(hour, minute)
    return v


ClockTime = Annotated[time, BeforeValidator(_coerce_clock)]


class WeatherForecast(BaseModel):
    """Forecast snapshot fetched by the weather collaborator."""

    model_config = ConfigDict(extra="allow")

    conditions: str | None = None
    temp_high: float | None = None
    temp_low: float | None = None
    precip_prob: float | None = None

    @property
    def is_bad(self) -> bool:
        """Rain or snow expected."""
        return (self.conditions or "").lower() in BAD_WEATHER_CONDITIONS


class VenueSnapshot(BaseModel):
    """Venue details copied onto the plan at scheduling time."""

    id: str
    name: str
    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    hours: dict[str, Any] | None = None


class ScheduledPlanV1(BaseModel):
    """A persisted date night plan."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    restaurant_id: str
    restaurant_name: str
    restaurant_address: str | None = None
    restaurant_lat: float | None = None
    restaurant_lng: float | None = None
    restaurant_hours: dict[str, Any] | None = None
    activity_id: str
    activity_name: str
    activity_address: str | None = None
    activity_lat: float | None = None
    activity_lng: float | None = None
    activity_hours: dict[str, Any] | None = None
    scheduled_date: date
    scheduled_time: time
    availability_status: AvailabilityStatus | None = None
    conflict_warnings: list[Conflict] = Field(default_factory=list)
    weather_forecast: WeatherForecast | None = None
    confirmation_numbers: dict[str, str] | None = None
    status: PlanStatus = PlanStatus.scheduled
    rating: int | None = None
    search_mode: SearchMode = SearchMode.both
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("conflict_warnings", mode="before")
    @classmethod
    def default_conflicts(cls, v: Any) -> Any:
        """Stored warnings may be NULL."""
        return v or []

    @property
    def starts_at(self) -> datetime:
        """Naive local start of the plan."""
        return datetime.combine(self.scheduled_date, self.scheduled_time)


class CreateScheduledPlanRequest(BaseModel):
    """Request body for POST /scheduled-plans."""

    restaurant: VenueSnapshot
    activity: VenueSnapshot
    scheduled_date: date
    scheduled_time: ClockTime
    search_mode: SearchMode = SearchMode.both
    weather_forecast: WeatherForecast | None = None
    confirmation_numbers: dict[str, str] | None = None


class UpdateScheduledPlanRequest(BaseModel):
    """Request body for PATCH /scheduled-plans/{id}."""

    scheduled_date: date | None = None
    scheduled_time: ClockTime | None = None
    weather_forecast: WeatherForecast | None = None
    confirmation_numbers: dict[str, str] | None = None


class CompletePlanRequest(BaseModel):
    """Request body for POST /scheduled-plans/{id}/complete."""

    rating: int | None = Field(None, ge=1, le=5)
