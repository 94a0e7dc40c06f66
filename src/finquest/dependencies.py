"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator

import redis.asyncio as redis

from finquest.database import get_session as _get_session
from finquest.redis_client import optional_redis

get_db = _get_session


async def get_event_redis() -> AsyncGenerator[redis.Redis | None, None]:
    """Yield the Redis client for event publication, or None when Redis is not configured."""
    yield optional_redis()
