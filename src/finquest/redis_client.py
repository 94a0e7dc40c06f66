"""Redis pool shared by the rate limiter, readiness probe and event publisher."""

import redis.asyncio as redis
import structlog

logger = structlog.get_logger()

_pool: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    global _pool  # noqa: PLW0603
    _pool = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )
    logger.info("redis_initialized", max_connections=max_connections)


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        await _pool.aclose()
        _pool = None


def get_redis() -> redis.Redis:
    """Return the pool; raises RuntimeError before ``init_redis``."""
    if _pool is None:
        msg = "Redis not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _pool


def optional_redis() -> redis.Redis | None:
    """Return the pool, or None when Redis is not configured (tests, local runs)."""
    return _pool
