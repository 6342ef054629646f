"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.cr_common.database import get_db_session
from src.main import app


@pytest.fixture
def db_session() -> MagicMock:
    """Stand-in AsyncSession: execute/commit/rollback are awaitable mocks."""
    session = MagicMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
async def client(db_session: MagicMock) -> AsyncClient:
    """Async HTTP client for FastAPI endpoints, with the DB session overridden.

    ASGITransport does not run the lifespan, so no database is contacted.
    """

    async def _override_session():
        yield db_session

    app.dependency_overrides[get_db_session] = _override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
