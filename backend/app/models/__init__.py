"""Models package - re-exports for convenience."""

from backend.app.models.availability import (
    AvailabilityResult,
    CheckAvailabilityRequest,
    CheckAvailabilityResponse,
    Conflict,
)
from backend.app.models.common import (
    REMINDER_TYPES,
    AvailabilityStatus,
    ConflictSeverity,
    ConflictType,
    DeliveryMethod,
    NotificationType,
    PlanStatus,
    SearchMode,
)
from backend.app.models.hours import (
    NoHoursData,
    OpenNowFlag,
    OperatingHours,
    Period,
    StructuredPeriods,
    TimePoint,
    parse_operating_hours,
)
from backend.app.models.notification import (
    DispatchResult,
    NotificationDraft,
    NotificationV1,
    QuietHours,
)
from backend.app.models.place import BuildPlanParams, Distances, PinnedPlanParams, Place, PlanResult
from backend.app.models.scheduled_plan import ScheduledPlanV1, VenueSnapshot, WeatherForecast

__all__ = [
    # Common
    "SearchMode",
    "AvailabilityStatus",
    "ConflictType",
    "ConflictSeverity",
    "PlanStatus",
    "NotificationType",
    "DeliveryMethod",
    "REMINDER_TYPES",
    # Places
    "Place",
    "Distances",
    "PlanResult",
    "BuildPlanParams",
    "PinnedPlanParams",
    # Hours
    "TimePoint",
    "Period",
    "NoHoursData",
    "StructuredPeriods",
    "OpenNowFlag",
    "OperatingHours",
    "parse_operating_hours",
    # Availability
    "Conflict",
    "AvailabilityResult",
    "CheckAvailabilityRequest",
    "CheckAvailabilityResponse",
    # Plans
    "ScheduledPlanV1",
    "VenueSnapshot",
    "WeatherForecast",
    # Notifications
    "QuietHours",
    "NotificationDraft",
    "NotificationV1",
    "DispatchResult",
]
