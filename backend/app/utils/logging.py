"""Structured logging for plan checks and notification passes."""

import logging
from typing import Any
from uuid import UUID

from backend.app.models.availability import AvailabilityResult
from backend.app.models.common import AvailabilityStatus

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at application start."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class StructuredEventLogger:
    """Structured logger for core operations."""

    def log_availability(
        self,
        result: AvailabilityResult,
        user_id: UUID,
        plan_id: UUID | None = None,
    ) -> None:
        """Log an availability check outcome."""
        log_data: dict[str, Any] = {
            "user_id": str(user_id),
            "status": result.status.value,
            "conflict_count": len(result.conflicts),
            "conflict_types": [c.type.value for c in result.conflicts],
        }

        if plan_id:
            log_data["plan_id"] = str(plan_id)

        log_msg = f"Availability check: {result.status.value}"

        if result.status == AvailabilityStatus.available:
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_generation(self, plan_id: UUID, user_id: UUID, types: list[str]) -> None:
        """Log notifications created for a plan."""
        logger.info(
            f"Generated {len(types)} notifications",
            extra={
                "structured": {
                    "plan_id": str(plan_id),
                    "user_id": str(user_id),
                    "count": len(types),
                    "types": types,
                }
            },
        )

    def log_dispatch(self, due: int, deferred: int, sent: int) -> None:
        """Log one dispatch pass."""
        log_data = {"due": due, "deferred_quiet_hours": deferred, "sent": sent}

        if due and not sent:
            logger.info("Dispatch pass: nothing sent", extra={"structured": log_data})
        else:
            logger.info(f"Dispatch pass: sent {sent}", extra={"structured": log_data})


event_logger = StructuredEventLogger()
