"""
Shared test fixtures for the Fixora test suite.

Async throughout: aiosqlite in-memory database + httpx AsyncClient.
"""

import os
from typing import AsyncGenerator

import pytest

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-fixora-suite"
os.environ["ADMIN_SECRET_KEY"] = "let-me-in-as-admin"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("SMTP_HOST", None)

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from fixora.api.v1.deps import get_notifier
from fixora.db.session import Database
from fixora.main import create_app
from fixora.models.service import Service

ADMIN_SECRET = os.environ["ADMIN_SECRET_KEY"]


class RecordingNotifier:
    """Stands in for the email notifier; records calls, optionally blows up."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail = False

    def _record(self, *call) -> None:
        if self.fail:
            raise RuntimeError("SMTP relay unreachable")
        self.calls.append(call)

    def booking_created(self, user, booking) -> None:
        self._record("created", user.email, booking.id)

    def booking_status_changed(self, user, booking, previous_status) -> None:
        self._record("status", user.email, booking.id, previous_status, booking.status)

    def contact_received(self, message) -> None:
        self._record("contact", message.email, message.id)


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """A fresh in-memory database per test."""
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.connect()
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(database: Database, notifier: RecordingNotifier):
    application = create_app()
    # ASGITransport does not run the lifespan, so attach the handle directly
    application.state.db = database
    application.dependency_overrides[get_notifier] = lambda: notifier
    return application


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with database.session() as session:
        yield session


# ── Helpers ─────────────────────────────────────────────────────────
@pytest.fixture
def register(async_client: AsyncClient):
    """Register an account and return ``(user_json, token)``.

    The client's cookie jar is cleared afterwards so each request
    authenticates only with the headers the test passes.
    """

    async def _register(
        email: str,
        password: str = "pw123456",
        name: str = "Test User",
        admin: bool = False,
    ) -> tuple[dict, str]:
        body = {"name": name, "email": email, "phone": "9876543210", "password": password}
        if admin:
            body["admin_secret"] = ADMIN_SECRET
        resp = await async_client.post("/api/v1/auth/register", json=body)
        assert resp.status_code == 201, resp.text
        async_client.cookies.clear()
        data = resp.json()
        return data["user"], data["token"]

    return _register


@pytest.fixture
async def service(db_session: AsyncSession) -> Service:
    """A bookable service seeded straight into the database."""
    svc = Service(
        title="AC Gas Refill",
        description="Complete AC gas top-up with leak check",
        category="ac",
        price=1499.0,
        duration="1-2 hours",
        image="https://img.example.com/ac.jpg",
        features=["Leak test", "Cooling check"],
    )
    db_session.add(svc)
    await db_session.commit()
    await db_session.refresh(svc)
    return svc


def booking_payload(service_id: int, **overrides) -> dict:
    body = {
        "service_id": service_id,
        "date": "2026-11-02",
        "time": "10:00 AM",
        "address": "42 Residency Road, Bengaluru",
        "phone": "9876543210",
        "notes": "Ring the bell twice",
    }
    body.update(overrides)
    return body


@pytest.fixture
def make_booking_payload():
    return booking_payload
