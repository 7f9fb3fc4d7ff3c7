"""FastAPI application - date night planner."""

from fastapi import FastAPI

from backend.app.api.routes.availability import router as availability_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.notifications import router as notifications_router
from backend.app.api.routes.plans import router as plans_router
from backend.app.api.routes.scheduled_plans import router as scheduled_plans_router
from backend.app.config import get_settings
from backend.app.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Date Night Planner API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(plans_router)
app.include_router(availability_router)
app.include_router(scheduled_plans_router)
app.include_router(notifications_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Date Night Planner API", "version": "0.1.0"}
