"""Redis client for payment idempotency keys.

A buyer's client may retry a coin purchase after a timeout; the optional
Idempotency-Key header is remembered here so the retry cannot credit the
same purchase twice.

Usage:
    from earnstack.infrastructure.redis_client import claim_idempotency_key

    if not await claim_idempotency_key("payment:abc"):
        raise DuplicateOperationError("payment:abc")
"""

from __future__ import annotations

import redis.asyncio as aioredis

from earnstack.config import get_settings
from earnstack.logging_config import get_logger

logger = get_logger(__name__)

_redis_client: aioredis.Redis | None = None


async def init_redis() -> aioredis.Redis:
    """Initialize and return the Redis client. Called during app startup."""
    global _redis_client
    settings = get_settings()
    _redis_client = aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
    )
    await _redis_client.ping()
    logger.info("redis.connected", url=settings.redis_url)
    return _redis_client


def get_redis() -> aioredis.Redis:
    """Return the Redis client singleton. Must call init_redis() first."""
    if _redis_client is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis_client


async def close_redis() -> None:
    """Close the Redis connection. Called during app shutdown."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        logger.info("redis.disconnected")
        _redis_client = None


# --- Idempotency Helpers ---


async def claim_idempotency_key(key: str, value: str = "1") -> bool:
    """Atomically reserve an idempotency key.

    Returns True if the key was new and is now reserved, False if it was
    already used within the TTL window.
    """
    settings = get_settings()
    redis = get_redis()
    created = await redis.set(
        f"idempotency:{key}",
        value,
        ex=settings.redis_idempotency_ttl_seconds,
        nx=True,
    )
    return bool(created)


async def release_idempotency_key(key: str) -> None:
    """Forget a reserved key so a failed operation can be retried."""
    redis = get_redis()
    await redis.delete(f"idempotency:{key}")
