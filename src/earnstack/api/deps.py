"""FastAPI dependency injection providers.

These are used with Depends() in route handlers to inject database sessions,
the Redis client, and configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.config import Settings, get_settings
from earnstack.infrastructure.database.engine import unit_of_work
from earnstack.infrastructure.redis_client import get_redis

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import redis.asyncio as aioredis
    from sqlalchemy.ext.asyncio import AsyncSession


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's unit-of-work session."""
    async with unit_of_work() as session:
        yield session


def get_redis_client() -> aioredis.Redis | None:
    """Provide the Redis client, or None when Redis was unavailable at startup."""
    try:
        return get_redis()
    except RuntimeError:
        return None


def get_app_settings() -> Settings:
    """Provide the application settings."""
    return get_settings()
