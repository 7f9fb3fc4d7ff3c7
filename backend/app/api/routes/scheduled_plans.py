"""Scheduled plan endpoints - create, list, edit, cancel, complete."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_current_context
from backend.app.api.ownership import load_owned_plan
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.models import ScheduledPlan as ScheduledPlanDB
from backend.app.db.plans import (
    create_scheduled_plan,
    list_scheduled_plans,
    to_plan_model,
    transition_plan,
    update_scheduled_plan,
)
from backend.app.models.common import PlanStatus
from backend.app.models.scheduled_plan import (
    CompletePlanRequest,
    CreateScheduledPlanRequest,
    ScheduledPlanV1,
    UpdateScheduledPlanRequest,
)

router = APIRouter(prefix="/scheduled-plans", tags=["scheduled-plans"])


def _require_scheduled(row: ScheduledPlanDB) -> None:
    """Only plans still in ``scheduled`` state can change."""
    if row.status != PlanStatus.scheduled.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Plan is {row.status}",
        )


@router.post("", response_model=ScheduledPlanV1, status_code=status.HTTP_201_CREATED)
async def create_plan(
    request: CreateScheduledPlanRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ScheduledPlanV1:
    """Persist a chosen restaurant + activity for a date and time."""
    row = await create_scheduled_plan(session, ctx, request)
    plan = to_plan_model(row)
    await session.commit()
    return plan


@router.get("", response_model=list[ScheduledPlanV1])
async def list_plans(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    plan_status: Annotated[PlanStatus | None, Query(alias="status")] = None,
) -> list[ScheduledPlanV1]:
    """List the caller's plans, optionally filtered by status."""
    rows = await list_scheduled_plans(session, ctx, plan_status)
    return [to_plan_model(row) for row in rows]


@router.get("/{plan_id}", response_model=ScheduledPlanV1)
async def get_plan(
    plan_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ScheduledPlanV1:
    """Fetch one of the caller's plans."""
    row = await load_owned_plan(session, plan_id, ctx)
    return to_plan_model(row)


@router.patch("/{plan_id}", response_model=ScheduledPlanV1)
async def update_plan(
    plan_id: uuid.UUID,
    request: UpdateScheduledPlanRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ScheduledPlanV1:
    """Edit date, time, forecast or confirmation numbers of a scheduled plan.

    Stored availability is left as is; clients re-run the check after a move.
    """
    row = await load_owned_plan(session, plan_id, ctx)
    _require_scheduled(row)

    await update_scheduled_plan(session, row, request)
    plan = to_plan_model(row)
    await session.commit()
    return plan


@router.post("/{plan_id}/cancel", response_model=ScheduledPlanV1)
async def cancel_plan(
    plan_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ScheduledPlanV1:
    """Cancel a scheduled plan."""
    row = await load_owned_plan(session, plan_id, ctx)
    _require_scheduled(row)

    await transition_plan(session, row, PlanStatus.cancelled)
    plan = to_plan_model(row)
    await session.commit()
    return plan


@router.post("/{plan_id}/complete", response_model=ScheduledPlanV1)
async def complete_plan(
    plan_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    request: CompletePlanRequest | None = None,
) -> ScheduledPlanV1:
    """Mark a scheduled plan as done, with an optional 1-5 rating."""
    row = await load_owned_plan(session, plan_id, ctx)
    _require_scheduled(row)

    rating = request.rating if request is not None else None
    await transition_plan(session, row, PlanStatus.completed, rating=rating)
    plan = to_plan_model(row)
    await session.commit()
    return plan
