"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire shapes that use camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchMode(str, Enum):
    """Which sides of a plan the caller wants filled."""

    both = "both"
    restaurant_only = "restaurant_only"
    activity_only = "activity_only"


class AvailabilityStatus(str, Enum):
    """Overall availability of a scheduled plan."""

    available = "available"
    limited = "limited"
    closed = "closed"


class ConflictType(str, Enum):
    """Scheduling problem categories."""

    restaurant_closing = "restaurant_closing"
    restaurant_closed = "restaurant_closed"
    activity_timing = "activity_timing"
    date_proximity = "date_proximity"


class ConflictSeverity(str, Enum):
    """Conflict severity, lowest first."""

    info = "info"
    warning = "warning"
    error = "error"


class PlanStatus(str, Enum):
    """Scheduled plan lifecycle."""

    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class NotificationType(str, Enum):
    """Notification kinds."""

    pre_date_2day = "pre_date_2day"
    day_of_morning = "day_of_morning"
    two_hours_before = "2hrs_before"
    post_date = "post_date"
    weather_alert = "weather_alert"
    confirmation_reminder = "confirmation_reminder"
    share_response = "share_response"


# Types produced by the reminder scheduler (share_response is ad hoc)
REMINDER_TYPES: tuple[NotificationType, ...] = (
    NotificationType.pre_date_2day,
    NotificationType.day_of_morning,
    NotificationType.two_hours_before,
    NotificationType.post_date,
    NotificationType.weather_alert,
    NotificationType.confirmation_reminder,
)


class DeliveryMethod(str, Enum):
    """Where a notification is surfaced."""

    in_app = "in_app"
    email = "email"
    sms = "sms"
