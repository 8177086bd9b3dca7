"""API test fixtures: FastAPI client with the DB dependency overridden.

Invariants:
    - get_db yields sessions from the per-test in-memory SQLite engine
    - Overrides are cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from metrics_api.infrastructure.database import get_db
from metrics_api.main import app


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def bare_client():
    """Client without a database: db_manager is never initialized."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
