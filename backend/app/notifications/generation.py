"""Persisting the reminder set for a plan."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.notifications import has_reminders, insert_notifications, to_notification_model
from backend.app.db.profiles import get_quiet_hours
from backend.app.models.notification import NotificationV1
from backend.app.models.scheduled_plan import ScheduledPlanV1
from backend.app.notifications.scheduler import schedule_notifications
from backend.app.utils.logging import event_logger
from backend.app.utils.metrics import planner_metrics


class NotificationsAlreadyGeneratedError(Exception):
    """The plan already owns a reminder set."""

    def __init__(self, plan_id: object) -> None:
        super().__init__(f"Notifications already generated for plan {plan_id}")
        self.plan_id = plan_id


async def generate_notifications(
    session: AsyncSession,
    plan: ScheduledPlanV1,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> list[NotificationV1]:
    """Create and commit the reminder notifications for a plan.

    Reads the owner's quiet hours, computes the schedule and inserts it as
    one batch. Nothing is written before the final insert.

    Args:
        session: Database session (committed by this function)
        plan: The scheduled plan
        now: Current local time (defaults to the wall clock)
        settings: Quiet-hour defaults and preferred hours

    Returns:
        Inserted notifications, all pending

    Raises:
        NotificationsAlreadyGeneratedError: If reminders already exist for the plan
    """
    settings = settings or get_settings()

    if await has_reminders(session, plan.id):
        raise NotificationsAlreadyGeneratedError(plan.id)

    quiet = await get_quiet_hours(session, plan.user_id, settings)
    drafts = schedule_notifications(plan, quiet, now=now, settings=settings)

    rows = await insert_notifications(session, drafts)
    notifications = [to_notification_model(row) for row in rows]
    await session.commit()

    types = [n.notification_type.value for n in notifications]
    event_logger.log_generation(plan.id, plan.user_id, types)
    planner_metrics.record_generated(types)

    return notifications
