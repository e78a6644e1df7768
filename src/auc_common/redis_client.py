"""Shared Redis connection for lot change fan-out.

Redis only carries notifications; the ledger lives in PostgreSQL, so a
Redis outage degrades live updates and nothing else.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings

logger = logging.getLogger(__name__)

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Lazily build the pooled client on first use."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            health_check_interval=30,
        )
    return _client


async def redis_available() -> bool:
    """PING for /health; False instead of raising."""
    try:
        return bool(await (await get_redis()).ping())
    except RedisError as exc:
        logger.warning("Redis ping failed: %r", exc)
        return False


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
