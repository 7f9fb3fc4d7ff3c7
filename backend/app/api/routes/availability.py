"""Availability check endpoint - venue hours and nearby plans."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_current_context
from backend.app.api.ownership import load_owned_plan
from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.plans import list_sibling_plan_dates, save_availability
from backend.app.models.availability import CheckAvailabilityRequest, CheckAvailabilityResponse
from backend.app.models.hours import parse_operating_hours
from backend.app.utils.logging import event_logger
from backend.app.utils.metrics import planner_metrics
from backend.app.verification.availability import check_availability

router = APIRouter(prefix="/availability", tags=["availability"])


@router.post("/check", response_model=CheckAvailabilityResponse)
async def check(
    request: CheckAvailabilityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CheckAvailabilityResponse:
    """Check a proposed plan against venue hours and the user's other dates.

    When ``scheduledPlanId`` is given the result is also stored on that plan,
    replacing any earlier status and warnings.

    Args:
        request: Hours payloads, date, time and optional plan id
        ctx: Request context (user_id)
        session: Database session
        settings: Timing constants

    Returns:
        Status, ordered conflicts and the venues' readable hours
    """
    plan_row = None
    if request.scheduled_plan_id is not None:
        plan_row = await load_owned_plan(session, request.scheduled_plan_id, ctx)

    sibling_dates = await list_sibling_plan_dates(
        session,
        ctx.user_id,
        request.scheduled_date,
        settings.date_proximity_days,
        exclude_plan_id=request.scheduled_plan_id,
    )

    result = check_availability(
        request.scheduled_date,
        request.scheduled_time,
        request.restaurant_hours,
        request.activity_hours,
        sibling_dates,
        settings=settings,
    )

    if plan_row is not None:
        await save_availability(session, plan_row, result)
        await session.commit()

    event_logger.log_availability(result, ctx.user_id, request.scheduled_plan_id)
    planner_metrics.record_availability(
        result.status.value, [c.type.value for c in result.conflicts]
    )

    return CheckAvailabilityResponse(
        status=result.status,
        conflicts=result.conflicts,
        restaurant_hours=parse_operating_hours(request.restaurant_hours).weekday_text,
        activity_hours=parse_operating_hours(request.activity_hours).weekday_text,
    )
