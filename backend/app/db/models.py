"""SQLAlchemy ORM models for profiles, scheduled plans and notifications."""

import uuid
from datetime import date, datetime, time
from typing import Any

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    Time,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JsonType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Profile(Base):
    """User profile - owns notification quiet hours."""

    __tablename__ = "profile"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "HH:MM" strings; NULL falls back to configured defaults
    notification_quiet_start: Mapped[str | None] = mapped_column(Text, nullable=True)
    notification_quiet_end: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )


class ScheduledPlan(Base):
    """Scheduled plan table - a restaurant + activity on a date."""

    __tablename__ = "scheduled_plan"
    __table_args__ = (Index("idx_scheduled_plan_user_date", "user_id", "scheduled_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    restaurant_id: Mapped[str] = mapped_column(Text, nullable=False)
    restaurant_name: Mapped[str] = mapped_column(Text, nullable=False)
    restaurant_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    restaurant_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    restaurant_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    restaurant_hours: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)

    activity_id: Mapped[str] = mapped_column(Text, nullable=False)
    activity_name: Mapped[str] = mapped_column(Text, nullable=False)
    activity_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    activity_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    activity_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    activity_hours: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)

    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)
    scheduled_time: Mapped[time] = mapped_column(Time, nullable=False)

    availability_status: Mapped[str | None] = mapped_column(Text, nullable=True)
    conflict_warnings: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JsonType, nullable=True
    )
    weather_forecast: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    confirmation_numbers: Mapped[dict[str, str] | None] = mapped_column(JsonType, nullable=True)

    status: Mapped[str] = mapped_column(Text, nullable=False, default="scheduled")
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    search_mode: Mapped[str] = mapped_column(Text, nullable=False, default="both")

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    notifications: Mapped[list["Notification"]] = relationship(
        "Notification", back_populates="scheduled_plan", cascade="all, delete-orphan"
    )


class Notification(Base):
    """Notification table - append-only at creation, sent_at set once at dispatch."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("idx_notification_due", "sent_at", "scheduled_for"),
        Index("idx_notification_plan", "scheduled_plan_id"),
        Index("idx_notification_user", "user_id", "scheduled_for"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    scheduled_plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("scheduled_plan.id", ondelete="CASCADE"), nullable=False
    )
    notification_type: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # Naive local wall-clock time
    scheduled_for: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    delivery_method: Mapped[str] = mapped_column(Text, nullable=False, default="in_app")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    # Relationships
    scheduled_plan: Mapped["ScheduledPlan"] = relationship(
        "ScheduledPlan", back_populates="notifications"
    )
