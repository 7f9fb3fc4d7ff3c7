"""Notification models - reminders and their delivery state."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import CamelModel, DeliveryMethod, NotificationType
from backend.app.utils.timeparse import is_quiet_hour, parse_clock


class QuietHours(BaseModel):
    """A user's daily do-not-disturb window, by whole hours [start, end)."""

    start_hour: int = Field(22, ge=0, le=23)
    end_hour: int = Field(8, ge=0, le=23)

    @classmethod
    def from_clock_strings(cls, start: str, end: str) -> "QuietHours":
        """Build from profile "HH:MM" strings; minutes are ignored."""
        return cls(start_hour=parse_clock(start)[0], end_hour=parse_clock(end)[0])

    def contains(self, hour: int) -> bool:
        """Whether the hour is quiet."""
        return is_quiet_hour(hour, self.start_hour, self.end_hour)


class NotificationDraft(BaseModel):
    """A notification computed by the scheduler, not yet persisted."""

    user_id: UUID
    scheduled_plan_id: UUID
    notification_type: NotificationType
    title: str
    message: str
    scheduled_for: datetime
    delivery_method: DeliveryMethod = DeliveryMethod.in_app


class NotificationV1(NotificationDraft):
    """A persisted notification. ``sent_at`` is None while pending."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sent_at: datetime | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None


class GenerateNotificationsRequest(BaseModel):
    """Request body for POST /notifications/generate."""

    scheduled_plan_id: UUID


class GenerateNotificationsResponse(BaseModel):
    """Response for POST /notifications/generate."""

    count: int
    notifications: list[NotificationV1]


class DispatchResult(CamelModel):
    """Outcome of one dispatch pass."""

    count: int
    sent_ids: list[UUID] = Field(default_factory=list)


class ShareResponseRequest(BaseModel):
    """A recipient's reply to a shared plan."""

    scheduled_plan_id: UUID
    response: Literal["in", "maybe", "tweak"]
    responder_name: str | None = None
    tweak_type: str | None = None
    tweak_note: str | None = None
