"""Direct Postgres backend: one ``INSERT ... RETURNING`` per request."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import Table, insert
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

import meetdesk.schemas  # noqa: F401  # registers the tables on SQLModel.metadata
from meetdesk.services.backend import BackendError, Row
from meetdesk.utils.db_async import get_engine

logger = logging.getLogger(__name__)


class PostgresBackend:
    def __init__(self, engine: Optional[AsyncEngine] = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = get_engine()
        return self._engine

    async def insert(self, table: str, record: Row) -> Row:
        sa_table = _lookup_table(table)
        stmt = insert(sa_table).values(**record).returning(*sa_table.c)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                row = result.mappings().one()
        except DBAPIError as exc:
            message, code = _driver_error(exc)
            logger.warning("Insert into %s failed (%s): %s", table, code or "no code", message)
            raise BackendError(message, code=code) from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Insert into %s failed: %s", table, exc)
            raise BackendError(str(exc) or type(exc).__name__) from exc
        return dict(row)

    async def aclose(self) -> None:
        # The engine is shared with init_db; dispose_engine() owns its teardown
        self._engine = None


def _lookup_table(name: str) -> Table:
    try:
        return SQLModel.metadata.tables[name]
    except KeyError:
        raise BackendError(f'relation "{name}" does not exist') from None


def _driver_error(exc: DBAPIError) -> tuple[str, Optional[str]]:
    """Message and SQLSTATE of the underlying driver exception.

    asyncpg errors arrive wrapped in SQLAlchemy's adapter; the driver exception is the
    adapter's ``__cause__``.
    """
    orig = exc.orig
    cause = getattr(orig, "__cause__", None) or orig
    code = getattr(cause, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(cause).strip() if cause is not None else ""
    return message or str(exc), code
