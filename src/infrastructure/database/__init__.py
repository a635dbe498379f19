"""
Database Infrastructure
=======================

The database connector used by the bootstrap sequence.

Uses SQLAlchemy 2.0 async engines. ``connect_database`` opens an engine,
probes it and reports the outcome as a ``ConnectResult`` instead of
raising, so startup can branch on it.
"""

from typing import Awaitable, Callable

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.config import Settings
from src.core import Connected, ConnectionFailed, ConnectResult, DatabaseConnectionException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

Connector = Callable[[], Awaitable[ConnectResult]]


class DatabaseHandle:
    """
    Live connection handle returned by a successful connect.

    Owns the engine; ``close()`` disposes it.
    """

    def __init__(self, engine: AsyncEngine, url: str):
        self._engine = engine
        self.url = url

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database handle is closed")
        return self._engine

    @property
    def is_closed(self) -> bool:
        return self._engine is None

    async def ping(self) -> bool:
        """Run ``SELECT 1``; returns False instead of raising."""
        if self._engine is None:
            return False
        try:
            await _probe(self._engine)
        except Exception as e:
            logger.warning("Database ping failed", extra={"error": str(e)})
            return False
        return True

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None


def mask_url(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<invalid database url>"


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for ``settings.database_url``.

    Pool sizing only applies to drivers with a queue pool; SQLite is
    left on its default pool.
    """
    # asyncpg understands ssl=, not libpq's sslmode=
    database_url = settings.database_url.replace("sslmode=", "ssl=")

    options = {
        "echo": settings.debug,
        "pool_pre_ping": True,
    }
    if make_url(database_url).get_backend_name() != "sqlite":
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow

    return create_async_engine(database_url, **options)


async def _probe(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def connect_database(settings: Settings) -> ConnectResult:
    """
    Open the database and verify it answers.

    Returns:
        Connected: with a live DatabaseHandle
        ConnectionFailed: with the error; the engine is already disposed
    """
    safe_url = mask_url(settings.database_url)
    logger.info("Connecting to database", extra={"database_url": safe_url})

    engine = None
    try:
        engine = build_engine(settings)
        await _probe(engine)
    except Exception as e:
        if engine is not None:
            await engine.dispose()
        return ConnectionFailed(
            DatabaseConnectionException.from_error(e, details={"database_url": safe_url})
        )

    logger.info("Database connected", extra={"database_url": safe_url})
    return Connected(DatabaseHandle(engine, settings.database_url))


def make_connector(settings: Settings) -> Connector:
    """Bind ``settings`` into a zero-argument connector."""

    async def connect() -> ConnectResult:
        return await connect_database(settings)

    return connect


__all__ = [
    "Connector",
    "DatabaseHandle",
    "build_engine",
    "connect_database",
    "make_connector",
    "mask_url",
]
