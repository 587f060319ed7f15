from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.modules.auth.constants import ADMIN_ROLE, USER_ROLE
from app.modules.auth.service import AdminAuthService, get_admin_auth_service
from app.modules.auth.session import SessionFamily
from app.shared.deps import get_admin_sessions, get_now, get_user_sessions
from tests.helpers import (
    ADMIN_COOKIE,
    ADMIN_PASSWORD,
    ADMIN_SECRET,
    FIXED_NOW,
    USER_COOKIE,
    USER_SECRET,
)


class FakeClock:
    """Mutable clock so a test can move time between requests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def admin_family() -> SessionFamily:
    return SessionFamily(
        name=ADMIN_COOKIE,
        secret=ADMIN_SECRET,
        lifetime=timedelta(days=7),
        role=ADMIN_ROLE,
    )


@pytest.fixture
def user_family() -> SessionFamily:
    return SessionFamily(
        name=USER_COOKIE,
        secret=USER_SECRET,
        lifetime=timedelta(days=30),
        role=USER_ROLE,
    )


@pytest.fixture
async def client(
    admin_family: SessionFamily, user_family: SessionFamily, clock: FakeClock
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_admin_sessions] = lambda: admin_family
    app.dependency_overrides[get_user_sessions] = lambda: user_family
    app.dependency_overrides[get_now] = lambda: clock.now
    app.dependency_overrides[get_admin_auth_service] = lambda: AdminAuthService(
        ADMIN_PASSWORD
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
