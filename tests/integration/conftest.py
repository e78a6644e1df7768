"""Integration-test fixtures.

These tests hit a real PostgreSQL + Redis (alembic upgrade head first) and
are skipped unless AUCTION_INTEGRATION=1. All of them share one event loop
so the module-level engine and Redis pools stay valid for the session.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    if os.environ.get("AUCTION_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set AUCTION_INTEGRATION=1 with a live database")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
