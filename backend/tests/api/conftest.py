"""API test fixtures — FastAPI test client with injectable collaborators.

Invariants:
    - get_db served from the per-test SQLite database
    - get_rate_limiter returns a fresh InMemoryRateLimiter per test
    - get_upstream_client returns the `upstream` fixture (a FakeUpstream)
    - admin_headers carries a valid session cookie, CSRF cookie and header
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_rate_limiter, get_upstream_client
from app.infrastructure.database import get_db
from app.infrastructure.rate_limiter import InMemoryRateLimiter
from app.infrastructure.session_tokens import issue_session_token
from app.main import app
from tests.env_defaults import ADMIN_JWT_SECRET, ADMIN_USER
from tests.services.fake_upstream import FakeUpstream

CSRF_TOKEN = "a" * 64


@pytest.fixture
def upstream():
    return FakeUpstream(
        universes={"123": 1001, "456": 1002},
        games={
            "1001": {"name": "Obby Quest", "visits": 100},
            "1002": {"name": "Tycoon", "visits": 2500.9},
        },
        icons={"1001": "https://tr.rbxcdn.com/1001.png"},
    )


@pytest.fixture
def limiter():
    return InMemoryRateLimiter(limit=30, window_seconds=60)


@pytest.fixture
async def client(test_session_factory, upstream, limiter):
    """FastAPI test client with DB, limiter and upstream overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_get_upstream_client():
        yield upstream

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_upstream_client] = override_get_upstream_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = issue_session_token(ADMIN_USER, ADMIN_JWT_SECRET)
    return {
        "Cookie": f"yd_admin={token}; yd_csrf={CSRF_TOKEN}",
        "X-CSRF-Token": CSRF_TOKEN,
    }
