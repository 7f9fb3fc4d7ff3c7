"""Data access for scheduled plans."""

import uuid
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import ScheduledPlan as ScheduledPlanDB
from backend.app.models.availability import AvailabilityResult
from backend.app.models.common import PlanStatus
from backend.app.models.scheduled_plan import (
    CreateScheduledPlanRequest,
    ScheduledPlanV1,
    UpdateScheduledPlanRequest,
)


def to_plan_model(row: ScheduledPlanDB) -> ScheduledPlanV1:
    """Convert an ORM row to the domain model."""
    return ScheduledPlanV1.model_validate(row)


async def create_scheduled_plan(
    session: AsyncSession,
    ctx: RequestContext,
    request: CreateScheduledPlanRequest,
) -> ScheduledPlanDB:
    """Insert a new plan in ``scheduled`` state.

    Args:
        session: Database session
        ctx: Request context (owner)
        request: Chosen venues, date and time

    Returns:
        The flushed row
    """
    restaurant = request.restaurant
    activity = request.activity

    row = ScheduledPlanDB(
        id=uuid.uuid4(),
        user_id=ctx.user_id,
        restaurant_id=restaurant.id,
        restaurant_name=restaurant.name,
        restaurant_address=restaurant.address,
        restaurant_lat=restaurant.lat,
        restaurant_lng=restaurant.lng,
        restaurant_hours=restaurant.hours,
        activity_id=activity.id,
        activity_name=activity.name,
        activity_address=activity.address,
        activity_lat=activity.lat,
        activity_lng=activity.lng,
        activity_hours=activity.hours,
        scheduled_date=request.scheduled_date,
        scheduled_time=request.scheduled_time,
        weather_forecast=(
            request.weather_forecast.model_dump(mode="json", exclude_none=True)
            if request.weather_forecast
            else None
        ),
        confirmation_numbers=request.confirmation_numbers,
        status=PlanStatus.scheduled.value,
        search_mode=request.search_mode.value,
        conflict_warnings=[],
        created_at=datetime.now(),
    )
    session.add(row)
    await session.flush()
    return row


async def get_scheduled_plan(session: AsyncSession, plan_id: uuid.UUID) -> ScheduledPlanDB | None:
    """Fetch a plan by id regardless of owner; callers enforce ownership."""
    result = await session.execute(select(ScheduledPlanDB).where(ScheduledPlanDB.id == plan_id))
    return result.scalar_one_or_none()


async def list_scheduled_plans(
    session: AsyncSession,
    ctx: RequestContext,
    status: PlanStatus | None = None,
) -> list[ScheduledPlanDB]:
    """List the caller's plans, soonest first."""
    query = (
        select(ScheduledPlanDB)
        .where(ScheduledPlanDB.user_id == ctx.user_id)
        .order_by(ScheduledPlanDB.scheduled_date, ScheduledPlanDB.scheduled_time)
    )
    if status is not None:
        query = query.where(ScheduledPlanDB.status == status.value)

    result = await session.execute(query)
    return list(result.scalars().all())


async def list_sibling_plan_dates(
    session: AsyncSession,
    user_id: uuid.UUID,
    around: date,
    days: int,
    exclude_plan_id: uuid.UUID | None = None,
) -> list[date]:
    """Dates of the user's other non-cancelled plans within ``days`` of ``around``.

    Args:
        session: Database session
        user_id: Plan owner
        around: Date being checked
        days: Window half-width in days
        exclude_plan_id: The plan being checked, if it is already persisted

    Returns:
        Sibling dates (may include ``around`` itself; the checker excludes it)
    """
    query = select(ScheduledPlanDB.scheduled_date).where(
        ScheduledPlanDB.user_id == user_id,
        ScheduledPlanDB.status != PlanStatus.cancelled.value,
        ScheduledPlanDB.scheduled_date >= around - timedelta(days=days),
        ScheduledPlanDB.scheduled_date <= around + timedelta(days=days),
    )
    if exclude_plan_id is not None:
        query = query.where(ScheduledPlanDB.id != exclude_plan_id)

    result = await session.execute(query)
    return list(result.scalars().all())


async def save_availability(
    session: AsyncSession, row: ScheduledPlanDB, result: AvailabilityResult
) -> None:
    """Overwrite the plan's availability status and warnings with a fresh result."""
    row.availability_status = result.status.value
    row.conflict_warnings = [c.model_dump(mode="json") for c in result.conflicts]
    row.updated_at = datetime.now()
    await session.flush()


async def update_scheduled_plan(
    session: AsyncSession, row: ScheduledPlanDB, request: UpdateScheduledPlanRequest
) -> None:
    """Apply the user's edits; only fields present in the request change."""
    if request.scheduled_date is not None:
        row.scheduled_date = request.scheduled_date
    if request.scheduled_time is not None:
        row.scheduled_time = request.scheduled_time
    if request.weather_forecast is not None:
        row.weather_forecast = request.weather_forecast.model_dump(mode="json", exclude_none=True)
    if request.confirmation_numbers is not None:
        row.confirmation_numbers = request.confirmation_numbers

    row.updated_at = datetime.now()
    await session.flush()


async def transition_plan(
    session: AsyncSession,
    row: ScheduledPlanDB,
    status: PlanStatus,
    *,
    rating: int | None = None,
) -> None:
    """Move a plan out of ``scheduled`` into ``completed`` or ``cancelled``."""
    now = datetime.now()
    row.status = status.value
    row.updated_at = now

    if status == PlanStatus.completed:
        row.completed_at = now
        if rating is not None:
            row.rating = rating

    await session.flush()
