"""Plan ownership checks shared by routes."""

import uuid

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import ScheduledPlan as ScheduledPlanDB
from backend.app.db.plans import get_scheduled_plan


async def load_owned_plan(
    session: AsyncSession, plan_id: uuid.UUID, ctx: RequestContext
) -> ScheduledPlanDB:
    """Fetch a plan the caller owns.

    Raises:
        HTTPException: 404 if the plan does not exist, 403 if someone else owns it
    """
    row = await get_scheduled_plan(session, plan_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    if row.user_id != ctx.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your plan")
    return row
