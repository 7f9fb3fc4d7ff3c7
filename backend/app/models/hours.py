"""Venue operating hours as a tagged variant.

Hours arrive from the venue-data provider in a loose shape: a dict that may
carry structured weekly ``periods``, only an ``open_now`` flag, or nothing
usable at all. ``parse_operating_hours`` normalizes that payload into exactly
one of three models so the availability checks branch on ``kind`` instead of
probing optional keys.
"""

import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class TimePoint(BaseModel):
    """A weekday + "HHMM" time, Sunday = 0."""

    day: int = Field(..., ge=0, le=6)
    time: str = "0000"

    @field_validator("time")
    @classmethod
    def validate_digits(cls, v: str) -> str:
        """Venue times are four digits, e.g. "0830"."""
        if not v.isdigit() or len(v) != 4:
            raise ValueError(f"expected HHMM digits, got {v!r}")
        return v


class Period(BaseModel):
    """One opening period. ``close`` is absent for venues open around the clock."""

    open: TimePoint
    close: TimePoint | None = None


class NoHoursData(BaseModel):
    """No usable hours information."""

    kind: Literal["none"] = "none"
    weekday_text: list[str] = Field(default_factory=list)


class StructuredPeriods(BaseModel):
    """Weekly opening periods."""

    kind: Literal["periods"] = "periods"
    periods: list[Period]
    open_now: bool | None = None
    weekday_text: list[str] = Field(default_factory=list)

    def periods_for_day(self, day: int) -> list[Period]:
        """Periods that open on the given weekday, in payload order."""
        return [p for p in self.periods if p.open.day == day]


class OpenNowFlag(BaseModel):
    """Only a current open/closed flag, no weekly structure."""

    kind: Literal["open_now"] = "open_now"
    open_now: bool
    weekday_text: list[str] = Field(default_factory=list)


OperatingHours = Annotated[
    NoHoursData | StructuredPeriods | OpenNowFlag, Field(discriminator="kind")
]


def parse_operating_hours(payload: Any) -> NoHoursData | StructuredPeriods | OpenNowFlag:
    """Normalize a raw hours payload.

    Unusable input never raises: malformed period entries are dropped, and a
    payload with nothing left degrades to ``OpenNowFlag`` or ``NoHoursData``.

    Args:
        payload: Raw provider dict, an already-parsed model, or None

    Returns:
        One of the three hours variants
    """
    if isinstance(payload, NoHoursData | StructuredPeriods | OpenNowFlag):
        return payload

    if not isinstance(payload, dict):
        return NoHoursData()

    weekday_text = [t for t in payload.get("weekday_text") or [] if isinstance(t, str)]
    open_now = payload.get("open_now")
    if not isinstance(open_now, bool):
        open_now = None

    raw_periods = payload.get("periods")
    if isinstance(raw_periods, list):
        periods: list[Period] = []
        for raw in raw_periods:
            try:
                periods.append(Period.model_validate(raw))
            except ValidationError:
                logger.debug("Dropping malformed hours period: %r", raw)

        # An explicitly empty list still means "structured, no periods"
        if periods or not raw_periods:
            return StructuredPeriods(periods=periods, open_now=open_now, weekday_text=weekday_text)

    if open_now is not None:
        return OpenNowFlag(open_now=open_now, weekday_text=weekday_text)

    return NoHoursData(weekday_text=weekday_text)
