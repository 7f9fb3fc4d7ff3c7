"""Availability checks for a scheduled plan against venue hours and other plans."""

from collections.abc import Iterable
from datetime import date, time
from typing import Any

from backend.app.config import Settings, get_settings
from backend.app.models.availability import AvailabilityResult, Conflict
from backend.app.models.common import AvailabilityStatus, ConflictSeverity, ConflictType
from backend.app.models.hours import OperatingHours, StructuredPeriods, parse_operating_hours
from backend.app.utils.timeparse import (
    MINUTES_IN_DAY,
    clock_to_minutes,
    format_minutes,
    hhmm_to_minutes,
    minutes_to_clock,
    sunday_weekday,
)

HoursInput = OperatingHours | dict[str, Any] | None


def _scheduled_minutes(scheduled_time: str | time) -> int:
    if isinstance(scheduled_time, time):
        return scheduled_time.hour * 60 + scheduled_time.minute
    return clock_to_minutes(scheduled_time)


def verify_restaurant_hours(
    hours: HoursInput,
    day_of_week: int,
    scheduled_minutes: int,
    settings: Settings,
) -> list[Conflict]:
    """Check that dinner fits before the restaurant closes.

    Checks:
    1. No period opens on the weekday and no ``open_now`` flag -> ERROR
    2. Dinner would run past the first period's closing time -> WARNING,
       suggesting max(scheduled - 60, close - 150)

    Missing or unusable hours produce no conflict.

    Args:
        hours: Raw or parsed restaurant hours
        day_of_week: Weekday index, Sunday = 0
        scheduled_minutes: Dinner start, minutes since midnight
        settings: Timing constants

    Returns:
        At most one conflict
    """
    parsed = parse_operating_hours(hours)

    if not isinstance(parsed, StructuredPeriods):
        return []

    day_periods = parsed.periods_for_day(day_of_week)

    if not day_periods:
        if parsed.open_now is not None:
            return []
        return [
            Conflict(
                type=ConflictType.restaurant_closed,
                message="Restaurant is closed on this day.",
                suggestion="Choose a different day or restaurant.",
                severity=ConflictSeverity.error,
            )
        ]

    period = day_periods[0]
    if period.close is None:
        return []

    open_minutes = hhmm_to_minutes(period.open.time)
    closing_minutes = hhmm_to_minutes(period.close.time)
    # Closing after midnight
    if closing_minutes <= open_minutes:
        closing_minutes += MINUTES_IN_DAY

    if scheduled_minutes + settings.dinner_duration_min <= closing_minutes:
        return []

    suggested = max(
        scheduled_minutes - settings.early_start_lookback_min,
        closing_minutes - settings.closing_buffer_min,
    )

    return [
        Conflict(
            type=ConflictType.restaurant_closing,
            message=f"Restaurant closes at {format_minutes(closing_minutes)}. Dinner may be rushed.",
            suggestion=f"Try {format_minutes(suggested)} instead for a relaxed experience?",
            severity=ConflictSeverity.warning,
            suggested_time=minutes_to_clock(suggested),
        )
    ]


def verify_activity_timing(
    hours: HoursInput,
    day_of_week: int,
    scheduled_minutes: int,
    settings: Settings,
) -> list[Conflict]:
    """Check that the activity is open by the time dinner is over.

    The activity is expected to start after dinner plus travel. Arriving
    before it opens is informational only.
    """
    parsed = parse_operating_hours(hours)

    if not isinstance(parsed, StructuredPeriods):
        return []

    day_periods = parsed.periods_for_day(day_of_week)
    if not day_periods:
        return []

    opening_minutes = hhmm_to_minutes(day_periods[0].open.time)
    expected_start = scheduled_minutes + settings.dinner_duration_min + settings.transit_buffer_min

    if expected_start >= opening_minutes:
        return []

    return [
        Conflict(
            type=ConflictType.activity_timing,
            message=f"Activity opens at {format_minutes(opening_minutes)}.",
            suggestion="Consider a later dinner or a different activity time.",
            severity=ConflictSeverity.info,
        )
    ]


def verify_date_proximity(
    scheduled_date: date,
    sibling_plan_dates: Iterable[date],
    settings: Settings,
) -> list[Conflict]:
    """Report other plans within a few days of this one (same date excluded)."""
    window = settings.date_proximity_days
    nearby = [
        d
        for d in sibling_plan_dates
        if d != scheduled_date and abs((d - scheduled_date).days) <= window
    ]

    if not nearby:
        return []

    return [
        Conflict(
            type=ConflictType.date_proximity,
            message=(
                f"You have {len(nearby)} other date(s) scheduled within {window} days of this date."
            ),
            suggestion="Just so you know! No action needed.",
            severity=ConflictSeverity.info,
        )
    ]


def resolve_status(conflicts: Iterable[Conflict]) -> AvailabilityStatus:
    """Any error -> closed, else any warning -> limited, else available."""
    severities = {c.severity for c in conflicts}

    if ConflictSeverity.error in severities:
        return AvailabilityStatus.closed
    if ConflictSeverity.warning in severities:
        return AvailabilityStatus.limited
    return AvailabilityStatus.available


def check_availability(
    scheduled_date: date,
    scheduled_time: str | time,
    restaurant_hours: HoursInput = None,
    activity_hours: HoursInput = None,
    sibling_plan_dates: Iterable[date] = (),
    *,
    settings: Settings | None = None,
) -> AvailabilityResult:
    """Run all availability checks for a proposed plan.

    Pure and deterministic: input hours are only read, never modified.

    Args:
        scheduled_date: Calendar date of the plan (naive)
        scheduled_time: Dinner start as "HH:MM" or a time
        restaurant_hours: Restaurant hours payload, may be None
        activity_hours: Activity hours payload, may be None
        sibling_plan_dates: Dates of the user's other plans
        settings: Timing constants (defaults to application settings)

    Returns:
        Status and ordered conflicts (restaurant, activity, proximity)

    Raises:
        ValueError: If scheduled_time is malformed
    """
    settings = settings or get_settings()

    scheduled_minutes = _scheduled_minutes(scheduled_time)
    day_of_week = sunday_weekday(scheduled_date)

    conflicts: list[Conflict] = []
    conflicts.extend(
        verify_restaurant_hours(restaurant_hours, day_of_week, scheduled_minutes, settings)
    )
    conflicts.extend(
        verify_activity_timing(activity_hours, day_of_week, scheduled_minutes, settings)
    )
    conflicts.extend(verify_date_proximity(scheduled_date, sibling_plan_dates, settings))

    return AvailabilityResult(status=resolve_status(conflicts), conflicts=conflicts)
