"""Shared test fixtures for the EarnStack test suite.

Provides:
    - A file-backed SQLite database per test (aiosqlite), with every
      transaction opened as BEGIN IMMEDIATE so concurrent sessions serialize
      the way they would against a transactional server
    - Session fixtures and a session factory for concurrency tests
    - Seeded buyer/worker/admin accounts
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from earnstack.config import get_settings
from earnstack.domain.enums import UserRole
from earnstack.infrastructure.database.orm_models import Base, User

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine

BUYER_EMAIL = "buyer@example.com"
WORKER_EMAIL = "worker@example.com"
OTHER_WORKER_EMAIL = "worker2@example.com"
ADMIN_EMAIL = "admin@example.com"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """A fresh SQLite database with the full schema."""
    db_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'earnstack.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(db_engine.sync_engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(db_engine.sync_engine, "begin")
    def _begin_immediate(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as db_session:
        yield db_session


# ---------------------------------------------------------------------------
# Data Fixtures
# ---------------------------------------------------------------------------


async def add_user(
    session: AsyncSession,
    email: str,
    role: UserRole,
    coin: int,
    name: str | None = None,
) -> User:
    """Insert a user with an exact balance and commit."""
    user = User(email=email, role=role.value, coin=coin, name=name or email.split("@")[0])
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def seeded(session: AsyncSession) -> dict[str, User]:
    """A buyer with 100 coins, two workers with 0 and an admin."""
    return {
        "buyer": await add_user(session, BUYER_EMAIL, UserRole.BUYER, 100, "Bea Buyer"),
        "worker": await add_user(session, WORKER_EMAIL, UserRole.WORKER, 0, "Wes Worker"),
        "worker2": await add_user(session, OTHER_WORKER_EMAIL, UserRole.WORKER, 0),
        "admin": await add_user(session, ADMIN_EMAIL, UserRole.ADMIN, 0),
    }


@pytest.fixture
def make_user(session: AsyncSession):
    """Factory fixture: ``await make_user(email, role, coin)``."""

    async def _make(email: str, role: UserRole, coin: int, name: str | None = None) -> User:
        return await add_user(session, email, role, coin, name)

    return _make
