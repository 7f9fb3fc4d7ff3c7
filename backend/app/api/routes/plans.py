"""Plan building endpoints - restaurant + activity selection."""

from fastapi import APIRouter

from backend.app.models.place import BuildPlanParams, PinnedPlanParams, PlanResult
from backend.app.planning.planner import build_pinned_plan, build_plan

router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("/build", response_model=PlanResult)
async def build(params: BuildPlanParams) -> PlanResult:
    """Pick the best restaurant and the nearest in-radius activity.

    Either side may be null when no candidate qualifies or the search mode
    skips it; distances are then zero.
    """
    return build_plan(params)


@router.post("/build/pinned", response_model=PlanResult)
async def build_pinned(params: PinnedPlanParams) -> PlanResult:
    """Build a plan from candidates chosen by index (out of range gives null)."""
    return build_pinned_plan(params)
