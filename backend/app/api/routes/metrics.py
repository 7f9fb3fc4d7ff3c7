"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Planner counters in Prometheus text format.

    Counters:
    - availability_checks_total{status}
    - availability_conflicts_total{type}
    - notifications_generated_total{type}
    - notifications_dispatched_total
    - notifications_quiet_deferred_total
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
