"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.mx_gateway.auth.jwt_handler import ROLE_ADMIN, create_access_token

OPERATOR_ADMIN = "0x00000000000000000000000000000000000A11CE"


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client: keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="session")
async def admin_headers() -> dict[str, str]:
    token = create_access_token(OPERATOR_ADMIN, ROLE_ADMIN)
    return {"Authorization": f"Bearer {token}"}
