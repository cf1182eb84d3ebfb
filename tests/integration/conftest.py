"""Pytest fixtures aligned with the live Postgres stack."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from meetdesk.services.backend import get_backend_provider
from meetdesk.services.postgres_backend import PostgresBackend
from meetdesk.utils.db_async import init_db, prepare_asyncpg_connection


def _load_database_url() -> str:
    """Resolve the database URL for tests, enforcing an explicit opt-in."""
    test_db_url = os.getenv("TEST_DATABASE_URL")
    pytest_allow_db = int(os.getenv("PYTEST_ALLOW_DB", "0"))
    if not test_db_url:
        pytest.skip("No TEST_DATABASE_URL is configured for tests.")
    if pytest_allow_db != 1:
        raise RuntimeError(
            "Running integration tests requires setting PYTEST_ALLOW_DB=1 to"
            " confirm the configured database is safe to mutate."
        )
    return test_db_url  # type: ignore[return-value]


@pytest.fixture
def database_url() -> str:
    """Return the Postgres URL the test suite should target."""
    return _load_database_url()


@pytest_asyncio.fixture()
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Yield an engine bound to a freshly created schema."""
    url, connect_args = prepare_asyncpg_connection(database_url)
    engine = create_async_engine(url, echo=False, pool_pre_ping=True, connect_args=connect_args)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await init_db(engine)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        await engine.dispose()


@pytest.fixture
def pg_backend(async_engine: AsyncEngine) -> PostgresBackend:
    return PostgresBackend(async_engine)


@pytest_asyncio.fixture()
async def pg_client(pg_backend: PostgresBackend) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the app writing to the integration database."""
    from meetdesk.main import app

    async def _provide() -> PostgresBackend:
        return pg_backend

    app.dependency_overrides[get_backend_provider] = lambda: _provide
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_backend_provider, None)
