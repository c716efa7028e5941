"""Async engine, session factory and the per-request unit of work.

Every ledger, capacity and status write made while serving one request goes
through a single ``AsyncSession`` opened by ``unit_of_work``. The session
commits once when the request's work finishes and rolls back if any step
raises, so a declined debit or a lost capacity race never leaves a partial
write behind.

Routes receive that session through ``earnstack.api.deps.get_db_session``:

    @router.post("/tasks")
    async def create_task(session: AsyncSession = Depends(get_db_session)):
        ...
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from earnstack.config import Settings, get_settings
from earnstack.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.db_echo_sql}
    # SQLite drivers use a static pool and reject the sizing arguments
    if make_url(settings.database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
        )
    return options


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **_engine_options(settings))
        logger.info(
            "database.engine_created",
            backend=_engine.url.get_backend_name(),
            pool_size=settings.db_pool_size,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


@asynccontextmanager
async def unit_of_work(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Open a session that commits on clean exit and rolls back on error.

    Handlers may commit early themselves (the coin purchase route does, to
    know the outcome before answering); the final commit is then a no-op.
    """
    async with (factory or get_session_factory())() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def ping_database(engine: AsyncEngine | None = None) -> None:
    """Round-trip a trivial query. Raises whatever the driver raises."""
    async with (engine or get_engine()).connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db() -> None:
    """Create the engine, and the tables when running in development.

    Other environments provision the schema ahead of time.
    """
    from earnstack.infrastructure.database.orm_models import Base

    engine = get_engine()
    if get_settings().is_development:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database.tables_created")
    else:
        logger.info("database.skipping_create_all", reason="not in development mode")


async def close_db() -> None:
    """Dispose of the engine on shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("database.engine_disposed")
    _engine = None
    _session_factory = None
