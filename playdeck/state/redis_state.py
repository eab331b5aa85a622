# playdeck/state/redis_state.py

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Optional

from redis.asyncio import Redis
from redis.exceptions import ConnectionError, TimeoutError

log = logging.getLogger("redis.state")


class RedisState:
    """
    Single Redis wrapper for the backend.

    - safe JSON
    - pub/sub
    - clear logs
    - survives connection drops (reads degrade to None)
    """

    def __init__(self, redis: Redis):
        self.redis = redis

    # =========================
    # JSON HELPERS
    # =========================

    async def get_json(self, key: str) -> Optional[Any]:
        try:
            raw = await self.redis.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except (ConnectionError, TimeoutError):
            log.exception("redis_get_json_connection_error", extra={"key": key})
            return None
        except json.JSONDecodeError:
            log.error("redis_get_json_decode_error", extra={"key": key})
            return None

    async def set_json(self, key: str, value: Any) -> None:
        try:
            await self.redis.set(key, json.dumps(value))
        except (ConnectionError, TimeoutError):
            log.exception("redis_set_json_connection_error", extra={"key": key})

    # =========================
    # COUNTERS
    # =========================

    async def next_id(self, key: str) -> int:
        # no fallback here: handing out a duplicate id is worse than failing the request
        return int(await self.redis.incr(key))

    async def set_counter(self, key: str, value: int) -> None:
        await self.redis.set(key, int(value))

    # =========================
    # PUB / SUB
    # =========================

    async def publish_event(self, channel: str, payload: dict) -> None:
        """
        Publishes an event for the WebSocket broadcaster / other consumers.
        """
        try:
            await self.redis.publish(channel, json.dumps(payload))
        except (ConnectionError, TimeoutError):
            log.exception(
                "redis_publish_error",
                extra={"channel": channel, "payload": payload},
            )

    async def listen(self, channel: str) -> AsyncIterator[str]:
        pubsub = self.redis.pubsub()
        await pubsub.subscribe(channel)
        try:
            while True:
                msg = await pubsub.get_message(ignore_subscribe_messages=True, timeout=1.0)
                if not msg:
                    continue
                data = msg.get("data")
                if isinstance(data, (bytes, bytearray)):
                    data = data.decode("utf-8", errors="ignore")
                if isinstance(data, str):
                    yield data
        finally:
            try:
                await pubsub.unsubscribe(channel)
                await pubsub.aclose()
            except (ConnectionError, TimeoutError):
                log.warning("redis_pubsub_close_error", extra={"channel": channel})

    # =========================
    # SAFE OPS
    # =========================

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.redis.exists(key))
        except (ConnectionError, TimeoutError):
            log.exception("redis_exists_connection_error", extra={"key": key})
            return False

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(key)
        except (ConnectionError, TimeoutError):
            log.exception("redis_delete_connection_error", extra={"key": key})

    async def close(self) -> None:
        await self.redis.aclose()
