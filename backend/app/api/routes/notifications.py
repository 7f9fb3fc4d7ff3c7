"""Notification endpoints - generation, dispatch, share replies and inbox."""

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_current_context
from backend.app.api.ownership import load_owned_plan
from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.notifications import (
    insert_notifications,
    list_user_notifications,
    mark_read,
    to_notification_model,
)
from backend.app.db.plans import get_scheduled_plan, to_plan_model
from backend.app.models.common import PlanStatus
from backend.app.models.notification import (
    DispatchResult,
    GenerateNotificationsRequest,
    GenerateNotificationsResponse,
    NotificationV1,
    ShareResponseRequest,
)
from backend.app.notifications.dispatcher import (
    LoggingNotificationChannel,
    NotificationChannel,
    dispatch_due_notifications,
)
from backend.app.notifications.generation import (
    NotificationsAlreadyGeneratedError,
    generate_notifications,
)
from backend.app.notifications.scheduler import share_response_draft
from backend.app.utils.metrics import planner_metrics

router = APIRouter(prefix="/notifications", tags=["notifications"])

_default_channel = LoggingNotificationChannel()


def get_notification_channel() -> NotificationChannel:
    """Channel that receives notifications once dispatched."""
    return _default_channel


@router.post(
    "/generate",
    response_model=GenerateNotificationsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate(
    request: GenerateNotificationsRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> GenerateNotificationsResponse:
    """Create the reminder set for one of the caller's plans.

    Returns:
        Count and the created notifications (all pending)

    Raises:
        HTTPException: 409 if reminders were already generated for the plan
    """
    row = await load_owned_plan(session, request.scheduled_plan_id, ctx)

    try:
        notifications = await generate_notifications(
            session, to_plan_model(row), settings=settings
        )
    except NotificationsAlreadyGeneratedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return GenerateNotificationsResponse(count=len(notifications), notifications=notifications)


@router.post("/dispatch", response_model=DispatchResult)
async def dispatch(
    session: Annotated[AsyncSession, Depends(get_session)],
    channel: Annotated[NotificationChannel, Depends(get_notification_channel)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DispatchResult:
    """Run one dispatch pass over all users' due notifications.

    Safe to call concurrently or repeatedly: a notification is sent at most once.
    """
    return await dispatch_due_notifications(session, channel=channel, settings=settings)


@router.post(
    "/share-response",
    response_model=NotificationV1,
    status_code=status.HTTP_201_CREATED,
)
async def share_response(
    request: ShareResponseRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> NotificationV1:
    """Record a recipient's reply to a shared plan as a notification for its owner.

    Recipients are not account holders, so no auth context is required. The
    plan id is the share capability: whoever holds it may reply. Replies are
    accepted only while the plan is still scheduled; the notification is due
    immediately and goes out on the next dispatch pass.
    """
    row = await get_scheduled_plan(session, request.scheduled_plan_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    if row.status != PlanStatus.scheduled.value:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="This shared plan is no longer open for replies",
        )

    draft = share_response_draft(
        to_plan_model(row),
        request.response,
        responder_name=request.responder_name,
        tweak_type=request.tweak_type,
        tweak_note=request.tweak_note,
    )
    (inserted,) = await insert_notifications(session, [draft])
    notification = to_notification_model(inserted)
    await session.commit()

    planner_metrics.record_generated([notification.notification_type.value])
    return notification


@router.get("", response_model=list[NotificationV1])
async def list_notifications(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    unread_only: Annotated[bool, Query()] = False,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[NotificationV1]:
    """The caller's delivered notifications, newest first."""
    rows = await list_user_notifications(session, ctx, unread_only=unread_only, limit=limit)
    return [to_notification_model(row) for row in rows]


@router.post("/{notification_id}/read", response_model=NotificationV1)
async def read(
    notification_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> NotificationV1:
    """Mark one of the caller's notifications as read (first read wins)."""
    row = await mark_read(session, notification_id, ctx, datetime.now())
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    notification = to_notification_model(row)
    await session.commit()
    return notification
