"""Shared pytest fixtures for all test suites."""

import os
import uuid
from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from backend.app.api.auth import DEV_USER_ID
from backend.app.db.engine import get_session
from backend.app.db.models import Base
from backend.app.db.models import ScheduledPlan as ScheduledPlanDB
from backend.app.main import app


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    # Ensure it's a postgres URL
    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    # Convert to async driver if needed
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with all tables created.

    A file is used instead of :memory: so every NullPool connection sees the
    same database.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the SQLite test database."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def api_client(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with sessions bound to the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def make_plan_row() -> Callable[..., ScheduledPlanDB]:
    """Factory for ORM plan rows with sensible defaults for direct inserts."""
    return _make_plan_row


def _make_plan_row(
    user_id: uuid.UUID = DEV_USER_ID,
    scheduled_date: date = date(2025, 6, 14),
    scheduled_time: time = time(19, 0),
    **overrides: Any,
) -> ScheduledPlanDB:
    values: dict[str, Any] = {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "restaurant_id": "r-1",
        "restaurant_name": "Trattoria",
        "activity_id": "a-1",
        "activity_name": "Jazz Club",
        "scheduled_date": scheduled_date,
        "scheduled_time": scheduled_time,
        "status": "scheduled",
        "search_mode": "both",
        "conflict_warnings": [],
        "created_at": datetime(2025, 6, 1, 12, 0),
    }
    values.update(overrides)
    return ScheduledPlanDB(**values)
