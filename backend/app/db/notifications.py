"""Data access for notifications."""

import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import Notification as NotificationDB
from backend.app.db.models import Profile
from backend.app.models.common import REMINDER_TYPES
from backend.app.models.notification import NotificationDraft, NotificationV1


def to_notification_model(row: NotificationDB) -> NotificationV1:
    """Convert an ORM row to the domain model."""
    return NotificationV1.model_validate(row)


async def has_reminders(session: AsyncSession, plan_id: uuid.UUID) -> bool:
    """Whether reminder notifications were already generated for a plan."""
    result = await session.execute(
        select(NotificationDB.id)
        .where(
            NotificationDB.scheduled_plan_id == plan_id,
            NotificationDB.notification_type.in_([t.value for t in REMINDER_TYPES]),
        )
        .limit(1)
    )
    return result.first() is not None


async def insert_notifications(
    session: AsyncSession, drafts: Sequence[NotificationDraft]
) -> list[NotificationDB]:
    """Insert drafts as pending notifications in one batch.

    Args:
        session: Database session
        drafts: Notifications computed by the scheduler

    Returns:
        Flushed rows, in draft order
    """
    rows = [
        NotificationDB(
            id=uuid.uuid4(),
            user_id=draft.user_id,
            scheduled_plan_id=draft.scheduled_plan_id,
            notification_type=draft.notification_type.value,
            title=draft.title,
            message=draft.message,
            scheduled_for=draft.scheduled_for,
            sent_at=None,
            delivery_method=draft.delivery_method.value,
            created_at=datetime.now(),
        )
        for draft in drafts
    ]
    session.add_all(rows)
    await session.flush()
    return rows


async def select_due(
    session: AsyncSession,
    now: datetime,
    limit: int,
    *,
    after: tuple[datetime, uuid.UUID] | None = None,
) -> list[tuple[NotificationDB, str | None, str | None]]:
    """Pending notifications due by ``now`` with their owner's quiet-hour strings.

    Rows come oldest first, ordered by (``scheduled_for``, ``id``). Pass the
    key of the last row seen as ``after`` to read the next page.

    Owners without a profile row yield ``(None, None)`` quiet hours.
    """
    query = (
        select(
            NotificationDB,
            Profile.notification_quiet_start,
            Profile.notification_quiet_end,
        )
        .outerjoin(Profile, Profile.user_id == NotificationDB.user_id)
        .where(NotificationDB.sent_at.is_(None), NotificationDB.scheduled_for <= now)
        .order_by(NotificationDB.scheduled_for, NotificationDB.id)
        .limit(limit)
    )
    if after is not None:
        after_time, after_id = after
        query = query.where(
            or_(
                NotificationDB.scheduled_for > after_time,
                and_(NotificationDB.scheduled_for == after_time, NotificationDB.id > after_id),
            )
        )

    result = await session.execute(query)
    return [(row[0], row[1], row[2]) for row in result.all()]


async def mark_sent(
    session: AsyncSession, notification_ids: Sequence[uuid.UUID], now: datetime
) -> list[uuid.UUID]:
    """Set ``sent_at`` on still-pending rows.

    The ``sent_at IS NULL`` guard makes concurrent passes safe: a row already
    marked by another pass is not updated and not returned here.

    Returns:
        IDs this call transitioned from pending to sent
    """
    if not notification_ids:
        return []

    result = await session.execute(
        update(NotificationDB)
        .where(NotificationDB.id.in_(list(notification_ids)), NotificationDB.sent_at.is_(None))
        .values(sent_at=now)
        .returning(NotificationDB.id)
        .execution_options(synchronize_session=False)
    )
    return list(result.scalars().all())


async def list_user_notifications(
    session: AsyncSession,
    ctx: RequestContext,
    *,
    unread_only: bool = False,
    limit: int = 50,
) -> list[NotificationDB]:
    """The caller's delivered notifications, newest first."""
    query = (
        select(NotificationDB)
        .where(NotificationDB.user_id == ctx.user_id, NotificationDB.sent_at.is_not(None))
        .order_by(NotificationDB.sent_at.desc())
        .limit(limit)
    )
    if unread_only:
        query = query.where(NotificationDB.read_at.is_(None))

    result = await session.execute(query)
    return list(result.scalars().all())


async def mark_read(
    session: AsyncSession, notification_id: uuid.UUID, ctx: RequestContext, now: datetime
) -> NotificationDB | None:
    """Set ``read_at`` once on one of the caller's notifications.

    Returns:
        The row, or None if it does not exist or belongs to someone else
    """
    result = await session.execute(
        select(NotificationDB).where(
            NotificationDB.id == notification_id, NotificationDB.user_id == ctx.user_id
        )
    )
    row = result.scalar_one_or_none()
    if row is None:
        return None

    if row.read_at is None:
        row.read_at = now
        await session.flush()
    return row
