"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app with dependency overrides and HTTP client
    - Database Fixtures: in-memory SQLite engine, session factory and session
    - Collaborator Fixtures: auth client, recording email provider, fixed clock
    - Data Fixtures: helpers that create profiles and tasks

Every test gets a fresh in-memory database. The app is exercised through
httpx's ASGITransport, so the lifespan does not run; the overrides below
stand in for what it would attach to app.state.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_STARTUP_REQUIRE_DB", "false")
os.environ.setdefault("AUTH_BACKEND", "memory")
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ.setdefault("JOBS_SCHEDULER_SECRET", "test-secret")
os.environ.setdefault("JOBS_SCHEDULER_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from doease.core.utils.dates import FixedClock  # noqa: E402
from doease.features.profiles.models import Profile  # noqa: E402
from doease.features.tasks.models import Task, TaskPriority  # noqa: E402
from doease.infra.auth import InMemoryAuthClient  # noqa: E402
from doease.infra.database import build_engine, build_sessionmaker, create_tables  # noqa: E402
from doease.infra.email import BaseEmailProvider, EmailDeliveryResult  # noqa: E402

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from doease.infra.email import EmailMessage

API = "/api/v1"
SCHEDULER_HEADERS = {"X-Scheduler-Token": "test-secret"}

# 2024-01-04 09:00 UTC, the "today" of the streak scenarios
NOW = datetime(2024, 1, 4, 9, 0, tzinfo=UTC)


# ============================================================================
# Collaborator Fixtures
# ============================================================================


class RecordingEmailProvider(BaseEmailProvider):
    """Email provider that keeps every message it is asked to send.

    Addresses in ``fail_for`` get a failed delivery result; addresses in
    ``raise_for`` make ``_do_send`` raise, which the base class turns into
    an UNEXPECTED_ERROR result.
    """

    def __init__(self) -> None:
        super().__init__("DoEase <hello@doease.app>")
        self.sent: list[EmailMessage] = []
        self.fail_for: set[str] = set()
        self.raise_for: set[str] = set()

    @property
    def provider_name(self) -> str:
        return "recording"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        recipient = message.to[0]
        if recipient in self.raise_for:
            msg = f"connection reset while sending to {recipient}"
            raise ConnectionError(msg)
        if recipient in self.fail_for:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="mailbox unavailable",
                error_code="BAD_REQUEST",
            )
        self.sent.append(message)
        return EmailDeliveryResult.success_result(
            message_id=f"msg-{len(self.sent)}",
            provider=self.provider_name,
        )

    def subjects_for(self, address: str) -> list[str]:
        return [m.subject for m in self.sent if address in m.to]


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2024-01-04 09:00 UTC."""
    return FixedClock(NOW)


@pytest.fixture
def auth_client() -> InMemoryAuthClient:
    return InMemoryAuthClient()


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with every table created.

    StaticPool keeps a single connection so all sessions see the same
    in-memory database. Foreign keys are enforced (see build_engine).
    """
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(bind=engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(db_engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for direct service and repository tests.

    Example:
        async def test_lookup(db_session, make_profile):
            profile = await make_profile(username="ada")
            assert await db_session.get(Profile, profile.id) is not None
    """
    async with session_factory() as session:
        yield session


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_profile(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[Profile]]:
    """Factory that commits a profile row and returns it detached.

    Example:
        profile = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))
    """

    async def _make(
        *,
        id: UUID | None = None,  # noqa: A002
        username: str = "ada",
        email: str | None = "ada@example.com",
        timezone: str | None = None,
        current_streak: int = 0,
        last_streak_updated: date | None = None,
        email_notifications_enabled: bool = True,
    ) -> Profile:
        profile = Profile(
            id=id or uuid4(),
            username=username,
            email=email,
            timezone=timezone,
            current_streak=current_streak,
            last_streak_updated=last_streak_updated,
            email_notifications_enabled=email_notifications_enabled,
        )
        async with session_factory() as session:
            session.add(profile)
            await session.commit()
        return profile

    return _make


@pytest.fixture
def make_task(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[Task]]:
    """Factory that commits a task row for an existing profile."""

    async def _make(
        user_id: UUID,
        *,
        name: str = "Write report",
        due_date: date | None = None,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        priority: TaskPriority = TaskPriority.LOW,
        completed: bool = False,
    ) -> Task:
        task = Task(
            user_id=user_id,
            name=name,
            due_date=due_date,
            start_time=start_time,
            end_time=end_time,
            priority=priority,
            completed=completed,
        )
        async with session_factory() as session:
            session.add(task)
            await session.commit()
        return task

    return _make


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_client: InMemoryAuthClient,
    email_provider: RecordingEmailProvider,
    clock: FixedClock,
) -> FastAPI:
    """FastAPI application wired to the test database and collaborators."""
    from doease.app.main import create_app
    from doease.core.dependencies import (
        get_auth_client,
        get_clock,
        get_email_provider,
        get_session_factory,
    )

    application = create_app()
    application.dependency_overrides[get_session_factory] = lambda: session_factory
    application.dependency_overrides[get_auth_client] = lambda: auth_client
    application.dependency_overrides[get_email_provider] = lambda: email_provider
    application.dependency_overrides[get_clock] = lambda: clock
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test app.

    Example:
        async def test_liveness(client):
            response = await client.get("/health/live")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Sign up and sign in through the API.

    Returns a dict with ``user_id``, ``token`` and ready-made ``headers``.
    """

    async def _register(
        email: str = "ada@example.com",
        *,
        username: str = "ada",
        password: str = "secret123",
        timezone: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"username": username, "email": email, "password": password}
        if timezone:
            payload["timezone"] = timezone
        response = await client.post(f"{API}/auth/signup", json=payload)
        assert response.status_code == 201, response.text

        response = await client.post(f"{API}/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]
        return {
            "user_id": UUID(response.json()["user_id"]),
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _register
