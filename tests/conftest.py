"""Shared fixtures: the app wired to an in-memory fake backend."""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi.encoders import jsonable_encoder
from httpx import ASGITransport, AsyncClient

from meetdesk.main import app
from meetdesk.services.backend import get_backend_provider


class FakeBackend:
    """Records inserts and answers like the database would.

    Set ``error`` to make the next inserts raise it instead.
    """

    def __init__(self) -> None:
        self.inserts: list[tuple[str, dict[str, Any]]] = []
        self.error: Optional[Exception] = None
        self.closed = False

    async def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        self.inserts.append((table, record))
        return {
            "id": str(uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
            **jsonable_encoder(record),
        }

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture()
async def app_client(fake_backend: FakeBackend) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the backend dependency overridden."""
    async def _provide() -> FakeBackend:
        return fake_backend

    app.dependency_overrides[get_backend_provider] = lambda: _provide
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_backend_provider, None)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
