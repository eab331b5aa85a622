from __future__ import annotations

import logging
from typing import Union

from redis.asyncio import Redis

from playdeck.core.config import Settings
from playdeck.state.memory_state import MemoryState
from playdeck.state.redis_state import RedisState

log = logging.getLogger("state.backend")

StateBackend = Union[RedisState, MemoryState]


async def create_state(settings: Settings) -> StateBackend:
    if settings.state_backend == "redis":
        redis = Redis.from_url(settings.redis_url, decode_responses=False)
        await redis.ping()
        log.info("redis_connected", extra={"url": settings.redis_url})
        return RedisState(redis)

    log.info("memory_state_ready")
    return MemoryState()
