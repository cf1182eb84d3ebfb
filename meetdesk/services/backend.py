"""Storage backend contract and the process-wide backend instance.

Two implementations exist: ``SupabaseClient`` posts to the Supabase REST API
with the service-role key, ``PostgresBackend`` writes through SQLAlchemy.
``STORAGE_BACKEND`` picks one at first use.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional, Protocol

from meetdesk.config import Settings, settings

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class BackendError(Exception):
    """The backend rejected or failed an insert.

    ``message`` is safe to return to the caller; ``code`` carries the
    PostgREST error code or Postgres SQLSTATE when one is known.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class BackendConfigError(RuntimeError):
    """Required backend settings are missing."""


class InsertBackend(Protocol):
    async def insert(self, table: str, record: Row) -> Row:
        """Insert one row and return it as stored, or raise ``BackendError``."""
        ...

    async def aclose(self) -> None:
        ...


BackendProvider = Callable[[], Awaitable[InsertBackend]]

_backend: Optional[InsertBackend] = None


def build_backend(config: Settings = settings) -> InsertBackend:
    """Construct the backend selected by ``config.storage_backend``."""
    if config.storage_backend == "postgres":
        from meetdesk.services.postgres_backend import PostgresBackend

        if not config.database_url:
            raise BackendConfigError("DATABASE_URL is required when STORAGE_BACKEND=postgres")
        return PostgresBackend()

    from meetdesk.services.supabase_client import SupabaseClient

    if not config.supabase_url or config.supabase_service_role_key is None:
        raise BackendConfigError(
            "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required when "
            "STORAGE_BACKEND=supabase"
        )
    return SupabaseClient(
        config.supabase_url,
        config.supabase_service_role_key.get_secret_value(),
        schema=config.supabase_schema,
        timeout=config.supabase_timeout_seconds,
    )


async def get_backend() -> InsertBackend:
    """Return the shared backend, built on first call.

    Runs on the event loop with no await between the check and the
    assignment, so concurrent first requests cannot build two backends.
    """
    global _backend
    if _backend is None:
        _backend = build_backend()
        logger.info("Storage backend ready: %s", type(_backend).__name__)
    return _backend


async def get_backend_provider() -> BackendProvider:
    """FastAPI dependency handing routes a way to resolve the backend later.

    Routes resolve the backend only after the body passed validation, so
    missing storage settings never mask a 400.
    """
    return get_backend


async def close_backend() -> None:
    """Release the shared backend's connections, if it was ever built."""
    global _backend
    if _backend is not None:
        await _backend.aclose()
        _backend = None
