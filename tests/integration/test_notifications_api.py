"""Integration tests for /notifications endpoints."""

import uuid
from datetime import date, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from backend.app.api.routes.notifications import get_notification_channel
from backend.app.db.models import Profile
from backend.app.main import app
from backend.app.notifications.dispatcher import InMemoryNotificationChannel

DEV_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
OTHER_USER = {"Authorization": f"Bearer {uuid.UUID('00000000-0000-0000-0000-000000000099')}"}


def plan_body(scheduled_date: date, **overrides: Any) -> dict[str, Any]:
    """Request body for POST /scheduled-plans."""
    body: dict[str, Any] = {
        "restaurant": {"id": "r-1", "name": "Trattoria", "address": "1 Main St"},
        "activity": {"id": "a-1", "name": "Jazz Club"},
        "scheduled_date": scheduled_date.isoformat(),
        "scheduled_time": "19:00",
    }
    body.update(overrides)
    return body


@pytest_asyncio.fixture
async def never_quiet(sqlite_engine: AsyncEngine) -> None:
    """Give the dev user an empty quiet window so dispatch never defers."""
    async with AsyncSession(sqlite_engine) as session:
        session.add(
            Profile(
                user_id=DEV_USER_ID,
                notification_quiet_start="00:00",
                notification_quiet_end="00:00",
                created_at=datetime(2025, 1, 1),
            )
        )
        await session.commit()


@pytest.fixture
def channel() -> Any:
    """Capture published notifications."""
    captured = InMemoryNotificationChannel()
    app.dependency_overrides[get_notification_channel] = lambda: captured
    yield captured
    app.dependency_overrides.pop(get_notification_channel, None)


async def create_plan(client: AsyncClient, scheduled_date: date, **overrides: Any) -> str:
    """Create a plan as the dev user and return its id."""
    response = await client.post("/scheduled-plans", json=plan_body(scheduled_date, **overrides))
    assert response.status_code == 201
    return str(response.json()["id"])


@pytest.mark.asyncio
async def test_generate_creates_reminder_set(api_client: AsyncClient) -> None:
    """A plan a week out with no forecast gets four reminders plus a confirmation nudge."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))

    response = await api_client.post(
        "/notifications/generate", json={"scheduled_plan_id": plan_id}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["count"] == 5
    assert [n["notification_type"] for n in data["notifications"]] == [
        "pre_date_2day",
        "day_of_morning",
        "2hrs_before",
        "post_date",
        "confirmation_reminder",
    ]
    assert all(n["sent_at"] is None for n in data["notifications"])


@pytest.mark.asyncio
async def test_generate_twice_conflicts(api_client: AsyncClient) -> None:
    """Re-generating for the same plan is rejected instead of duplicating."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))

    first = await api_client.post("/notifications/generate", json={"scheduled_plan_id": plan_id})
    second = await api_client.post("/notifications/generate", json={"scheduled_plan_id": plan_id})

    assert first.status_code == 201
    assert second.status_code == 409


@pytest.mark.asyncio
async def test_generate_for_someone_elses_plan_forbidden(api_client: AsyncClient) -> None:
    """Ownership is enforced."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))

    response = await api_client.post(
        "/notifications/generate", json={"scheduled_plan_id": plan_id}, headers=OTHER_USER
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_generate_for_unknown_plan_not_found(api_client: AsyncClient) -> None:
    """Unknown plan id -> 404."""
    response = await api_client.post(
        "/notifications/generate", json={"scheduled_plan_id": str(uuid.uuid4())}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_dispatch_then_inbox_then_read(
    api_client: AsyncClient, never_quiet: None, channel: InMemoryNotificationChannel
) -> None:
    """Past-due reminders are sent once, listed, and can be marked read."""
    plan_id = await create_plan(api_client, date(2024, 1, 10))
    generated = await api_client.post(
        "/notifications/generate", json={"scheduled_plan_id": plan_id}
    )
    # Past plan: only the unconditional reminders
    assert generated.json()["count"] == 3

    first = await api_client.post("/notifications/dispatch")
    second = await api_client.post("/notifications/dispatch")

    assert first.status_code == 200
    assert first.json()["count"] == 3
    assert len(first.json()["sentIds"]) == 3
    assert second.json() == {"count": 0, "sentIds": []}
    assert len(channel.published) == 3

    inbox = await api_client.get("/notifications")
    assert inbox.status_code == 200
    items = inbox.json()
    assert len(items) == 3
    assert all(item["sent_at"] is not None for item in items)

    notification_id = items[0]["id"]
    read = await api_client.post(f"/notifications/{notification_id}/read")
    assert read.status_code == 200
    assert read.json()["read_at"] is not None

    unread = await api_client.get("/notifications", params={"unread_only": "true"})
    assert len(unread.json()) == 2


@pytest.mark.asyncio
async def test_read_someone_elses_notification_not_found(
    api_client: AsyncClient, never_quiet: None, channel: InMemoryNotificationChannel
) -> None:
    """Another user cannot mark the notification read."""
    plan_id = await create_plan(api_client, date(2024, 1, 10))
    await api_client.post("/notifications/generate", json={"scheduled_plan_id": plan_id})
    sent = await api_client.post("/notifications/dispatch")
    notification_id = sent.json()["sentIds"][0]

    response = await api_client.post(f"/notifications/{notification_id}/read", headers=OTHER_USER)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pending_notifications_not_in_inbox(api_client: AsyncClient) -> None:
    """Only sent notifications are listed."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))
    await api_client.post("/notifications/generate", json={"scheduled_plan_id": plan_id})

    inbox = await api_client.get("/notifications")

    assert inbox.json() == []


@pytest.mark.asyncio
async def test_share_response_creates_due_notification(
    api_client: AsyncClient, never_quiet: None, channel: InMemoryNotificationChannel
) -> None:
    """A reply is stored for the owner and goes out on the next pass."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))

    response = await api_client.post(
        "/notifications/share-response",
        json={
            "scheduled_plan_id": plan_id,
            "response": "tweak",
            "responder_name": "Sam",
            "tweak_type": "time",
            "tweak_note": "8pm?",
        },
        headers=OTHER_USER,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["notification_type"] == "share_response"
    assert data["user_id"] == str(DEV_USER_ID)
    assert data["message"] == "Sam wants to tweak (time): 8pm?"

    dispatched = await api_client.post("/notifications/dispatch")
    assert dispatched.json()["sentIds"] == [data["id"]]


@pytest.mark.asyncio
async def test_share_response_does_not_block_generation(api_client: AsyncClient) -> None:
    """A share reply is not part of the reminder set."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))
    await api_client.post(
        "/notifications/share-response",
        json={"scheduled_plan_id": plan_id, "response": "in"},
    )

    response = await api_client.post(
        "/notifications/generate", json={"scheduled_plan_id": plan_id}
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_share_response_validates_response(api_client: AsyncClient) -> None:
    """Unknown response values are rejected."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))

    response = await api_client.post(
        "/notifications/share-response",
        json={"scheduled_plan_id": plan_id, "response": "never"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_share_response_refused_once_plan_is_closed(
    api_client: AsyncClient, never_quiet: None
) -> None:
    """A cancelled plan no longer accepts replies; no notification is stored."""
    plan_id = await create_plan(api_client, date.today() + timedelta(days=7))
    await api_client.post(f"/scheduled-plans/{plan_id}/cancel")

    response = await api_client.post(
        "/notifications/share-response",
        json={"scheduled_plan_id": plan_id, "response": "in"},
    )

    assert response.status_code == 410
    dispatched = await api_client.post("/notifications/dispatch")
    assert dispatched.json()["sentIds"] == []
