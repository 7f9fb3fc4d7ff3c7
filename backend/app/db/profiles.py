"""Data access for user profiles (quiet hours)."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings
from backend.app.db.models import Profile
from backend.app.models.notification import QuietHours

logger = logging.getLogger(__name__)


def quiet_hours_from_profile(
    start: str | None, end: str | None, settings: Settings
) -> QuietHours:
    """Quiet hours from profile strings, falling back to defaults.

    Null or malformed values use the configured default for that bound.
    """
    try:
        return QuietHours.from_clock_strings(
            start or settings.default_quiet_start,
            end or settings.default_quiet_end,
        )
    except ValueError:
        logger.warning("Invalid quiet hours %r-%r, using defaults", start, end)
        return QuietHours.from_clock_strings(
            settings.default_quiet_start, settings.default_quiet_end
        )


async def get_quiet_hours(
    session: AsyncSession, user_id: uuid.UUID, settings: Settings
) -> QuietHours:
    """Load a user's quiet hours; users without a profile get the defaults."""
    result = await session.execute(
        select(Profile.notification_quiet_start, Profile.notification_quiet_end).where(
            Profile.user_id == user_id
        )
    )
    row = result.one_or_none()

    if row is None:
        return quiet_hours_from_profile(None, None, settings)
    return quiet_hours_from_profile(row[0], row[1], settings)
