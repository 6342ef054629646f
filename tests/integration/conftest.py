"""Integration-test fixtures.

Requires a running postgres at DATABASE_URL with `alembic upgrade head`
applied. Run explicitly: pytest tests/integration

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) stays valid across
the whole session.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client against the real database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
