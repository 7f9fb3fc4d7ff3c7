"""Dispatch pass - promote due notifications from pending to sent.

One pass:

1. Select pending rows (``sent_at IS NULL``) with ``scheduled_for <= now``.
2. Drop rows whose owner is inside quiet hours at the current clock hour.
   Scheduling only clamped some types, so this check runs for every row.
   Selection pages on until a full batch survives this filter.
3. Mark the survivors sent with a conditional update (``WHERE sent_at IS NULL``).
   Only rows this pass actually transitioned are reported and published, so
   overlapping passes never send the same row twice.

Delivery beyond the event channel is not tracked. A failed publish is logged
and does not roll back the sent mark or stop the remaining publishes.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.models import Notification as NotificationDB
from backend.app.db.notifications import mark_sent, select_due, to_notification_model
from backend.app.db.profiles import quiet_hours_from_profile
from backend.app.models.notification import DispatchResult, NotificationV1
from backend.app.utils.logging import event_logger
from backend.app.utils.metrics import planner_metrics

logger = logging.getLogger(__name__)


class NotificationChannel(Protocol):
    """Receives notifications once they are marked sent."""

    async def publish(self, notification: NotificationV1) -> None:
        """Publish one sent notification."""
        ...


class InMemoryNotificationChannel:
    """Collects published notifications in a list."""

    def __init__(self) -> None:
        self.published: list[NotificationV1] = []

    async def publish(self, notification: NotificationV1) -> None:
        """Append to ``published``."""
        self.published.append(notification)


class LoggingNotificationChannel:
    """Default channel: records the hand-off in the log."""

    async def publish(self, notification: NotificationV1) -> None:
        """Log the delivered notification."""
        logger.info(
            "Notification sent",
            extra={
                "structured": {
                    "notification_id": str(notification.id),
                    "user_id": str(notification.user_id),
                    "type": notification.notification_type.value,
                }
            },
        )


def filter_quiet_hours(
    candidates: Sequence[tuple[NotificationDB, str | None, str | None]],
    now: datetime,
    settings: Settings,
) -> tuple[list[NotificationDB], int]:
    """Split due rows by the owner's quiet hours at ``now.hour``.

    Returns:
        (rows to send, number held back)
    """
    eligible: list[NotificationDB] = []
    deferred = 0

    for row, quiet_start, quiet_end in candidates:
        quiet = quiet_hours_from_profile(quiet_start, quiet_end, settings)
        if quiet.contains(now.hour):
            deferred += 1
        else:
            eligible.append(row)

    return eligible, deferred


async def _collect_eligible(
    session: AsyncSession, now: datetime, settings: Settings
) -> tuple[list[NotificationDB], int, int]:
    """Page through due rows until a batch of sendable ones is filled.

    Rows held back by quiet hours do not count toward the batch, so a backlog
    of quiet-hour rows cannot starve owners who are awake.

    Returns:
        (rows to send, rows scanned, rows held back)
    """
    limit = settings.dispatch_batch_limit
    eligible: list[NotificationDB] = []
    scanned = deferred = 0
    after = None

    while len(eligible) < limit:
        page = await select_due(session, now, limit, after=after)
        rows, held = filter_quiet_hours(page, now, settings)
        eligible.extend(rows)
        scanned += len(page)
        deferred += held

        if len(page) < limit:
            break
        last = page[-1][0]
        after = (last.scheduled_for, last.id)

    return eligible[:limit], scanned, deferred


async def dispatch_due_notifications(
    session: AsyncSession,
    *,
    now: datetime | None = None,
    channel: NotificationChannel | None = None,
    settings: Settings | None = None,
) -> DispatchResult:
    """Run one dispatch pass and commit it.

    Args:
        session: Database session (committed by this function)
        now: Current local time (defaults to the wall clock)
        channel: Where sent notifications are published
        settings: Defaults for quiet hours and batch size

    Returns:
        Count and ids of notifications this pass marked sent
    """
    settings = settings or get_settings()
    now = now or datetime.now()

    eligible, scanned, deferred = await _collect_eligible(session, now, settings)

    # Snapshot before commit expires the rows
    snapshots = {row.id: to_notification_model(row) for row in eligible}

    sent_ids = await mark_sent(session, list(snapshots), now)
    await session.commit()

    event_logger.log_dispatch(due=scanned, deferred=deferred, sent=len(sent_ids))
    planner_metrics.record_dispatch(sent=len(sent_ids), deferred=deferred)

    if channel is not None:
        for notification_id in sent_ids:
            try:
                await channel.publish(
                    snapshots[notification_id].model_copy(update={"sent_at": now})
                )
            except Exception:
                logger.exception("Failed to publish notification %s", notification_id)

    return DispatchResult(count=len(sent_ids), sent_ids=sent_ids)
