# playdeck/state/memory_state.py

from __future__ import annotations

import asyncio
import copy
import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

log = logging.getLogger("memory.state")


class MemoryState:
    """
    In-process drop-in for RedisState.

    Same surface (get_json / set_json / next_id / publish_event / listen),
    values are deep-copied in and out so callers never share mutable state
    with the store. Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._counters: Dict[str, int] = {}
        self._listeners: Dict[str, List[asyncio.Queue]] = {}

    # =========================
    # JSON HELPERS
    # =========================

    async def get_json(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        if value is None:
            return None
        return copy.deepcopy(value)

    async def set_json(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    # =========================
    # COUNTERS
    # =========================

    async def next_id(self, key: str) -> int:
        self._counters[key] = self._counters.get(key, 0) + 1
        return self._counters[key]

    async def set_counter(self, key: str, value: int) -> None:
        self._counters[key] = int(value)

    # =========================
    # PUB / SUB
    # =========================

    async def publish_event(self, channel: str, payload: dict) -> None:
        raw = json.dumps(payload)
        for queue in list(self._listeners.get(channel, [])):
            queue.put_nowait(raw)

    async def listen(self, channel: str) -> AsyncIterator[str]:
        queue: asyncio.Queue = asyncio.Queue()
        self._listeners.setdefault(channel, []).append(queue)
        log.debug("memory_listener_added", extra={"channel": channel})
        try:
            while True:
                yield await queue.get()
        finally:
            self._listeners[channel].remove(queue)

    # =========================
    # SAFE OPS
    # =========================

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def close(self) -> None:
        self._data.clear()
        self._counters.clear()
