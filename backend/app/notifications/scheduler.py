"""Reminder schedule for a scheduled plan.

Given a plan starting at T, the scheduler emits, in order:

- pre_date_2day: T - 2 days at 10:00, only while still in the future (clamped)
- day_of_morning: day of T at 08:00 (clamped)
- 2hrs_before: T - 2 hours
- post_date: T + 1 day at 10:00 (clamped)
- weather_alert: T - 1 day at 18:00, on rain or snow, only while in the future
- confirmation_reminder: T - 1 day at 14:00, when no confirmation numbers
  are recorded, only while in the future

Clamped rows whose preferred hour is quiet are moved to the end of the quiet
window. Unclamped rows are filtered again at dispatch time.
"""

from datetime import date, datetime, time, timedelta

from backend.app.config import Settings, get_settings
from backend.app.models.common import NotificationType
from backend.app.models.notification import NotificationDraft, QuietHours
from backend.app.models.scheduled_plan import ScheduledPlanV1


def _at_hour(day: date, hour: int) -> datetime:
    return datetime.combine(day, time(hour, 0))


def quiet_adjusted(day: date, preferred_hour: int, quiet: QuietHours) -> datetime:
    """``day`` at the preferred hour, or at the end of quiet hours if that hour is quiet."""
    hour = quiet.end_hour if quiet.contains(preferred_hour) else preferred_hour
    return _at_hour(day, hour)


def _clock_label(plan: ScheduledPlanV1) -> str:
    return plan.scheduled_time.strftime("%H:%M")


def schedule_notifications(
    plan: ScheduledPlanV1,
    quiet: QuietHours,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> list[NotificationDraft]:
    """Compute the reminder set for a plan.

    Args:
        plan: Persisted plan (date, time, venues, forecast, confirmations)
        quiet: Owner's quiet hours
        now: Current local time (defaults to the wall clock)
        settings: Preferred hours (defaults to application settings)

    Returns:
        Drafts in the order listed in the module docstring
    """
    settings = settings or get_settings()
    now = now or datetime.now()

    starts_at = plan.starts_at
    weekday = starts_at.strftime("%A")
    clock = _clock_label(plan)

    def draft(
        kind: NotificationType, title: str, message: str, when: datetime
    ) -> NotificationDraft:
        return NotificationDraft(
            user_id=plan.user_id,
            scheduled_plan_id=plan.id,
            notification_type=kind,
            title=title,
            message=message,
            scheduled_for=when,
        )

    drafts: list[NotificationDraft] = []

    two_days_before = starts_at - timedelta(days=2)
    if two_days_before > now:
        drafts.append(
            draft(
                NotificationType.pre_date_2day,
                "Date Night Coming Up!",
                f"Your date is {weekday} at {clock}. "
                f"{plan.restaurant_name} + {plan.activity_name}",
                quiet_adjusted(two_days_before.date(), settings.pre_date_hour, quiet),
            )
        )

    drafts.append(
        draft(
            NotificationType.day_of_morning,
            "Tonight's the Night!",
            f"Your date is tonight at {clock}. {plan.restaurant_name} -> {plan.activity_name}",
            quiet_adjusted(starts_at.date(), settings.day_of_morning_hour, quiet),
        )
    )

    drafts.append(
        draft(
            NotificationType.two_hours_before,
            "Leaving Soon?",
            f"Check traffic to {plan.restaurant_name}. Dinner at {clock}.",
            starts_at - timedelta(hours=2),
        )
    )

    drafts.append(
        draft(
            NotificationType.post_date,
            "How Was Your Date?",
            "Tell us how it went! Rate your experience.",
            quiet_adjusted(
                (starts_at + timedelta(days=1)).date(), settings.post_date_hour, quiet
            ),
        )
    )

    day_before = (starts_at - timedelta(days=1)).date()

    forecast = plan.weather_forecast
    if forecast is not None and forecast.is_bad:
        alert_at = _at_hour(day_before, settings.weather_alert_hour)
        if alert_at > now:
            drafts.append(
                draft(
                    NotificationType.weather_alert,
                    "Weather Alert",
                    f"{forecast.conditions} expected {weekday} night - "
                    f"{plan.restaurant_name} and {plan.activity_name} are indoor-friendly",
                    alert_at,
                )
            )

    if not plan.confirmation_numbers:
        reminder_at = _at_hour(day_before, settings.confirmation_reminder_hour)
        if reminder_at > now:
            drafts.append(
                draft(
                    NotificationType.confirmation_reminder,
                    "Don't Forget!",
                    "Add confirmation numbers for better tracking",
                    reminder_at,
                )
            )

    return drafts


def share_response_draft(
    plan: ScheduledPlanV1,
    response: str,
    *,
    responder_name: str | None = None,
    tweak_type: str | None = None,
    tweak_note: str | None = None,
    now: datetime | None = None,
) -> NotificationDraft:
    """Immediate notification to the plan owner about a reply to a shared plan."""
    name = responder_name or "Someone"

    if response == "in":
        message = f"{name} is in!"
    elif response == "maybe":
        message = f"{name} responded: Maybe"
    else:
        detail = f" ({tweak_type})" if tweak_type else ""
        message = f"{name} wants to tweak{detail}: {tweak_note or 'No details'}"

    return NotificationDraft(
        user_id=plan.user_id,
        scheduled_plan_id=plan.id,
        notification_type=NotificationType.share_response,
        title="New Response to Your Shared Plan",
        message=message,
        scheduled_for=now or datetime.now(),
    )
