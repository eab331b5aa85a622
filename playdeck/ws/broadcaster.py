from __future__ import annotations

import asyncio
import logging

from playdeck.state.backend import StateBackend
from playdeck.state.redis_keys import EVENTS_CHANNEL
from playdeck.ws.manager import WebSocketManager

log = logging.getLogger("ws.broadcaster")


class StateToWebSocketBroadcaster:
    """
    Forwards every event published on the state backend to the WebSocket clients.
    Works with Redis pub/sub and with the in-process backend alike.
    """

    def __init__(self, state: StateBackend, manager: WebSocketManager) -> None:
        self.state = state
        self.manager = manager
        self._task: asyncio.Task | None = None
        self._running = False

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        log.info("broadcaster_started")

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        log.info("broadcaster_stopped")

    async def _loop(self) -> None:
        async for data in self.state.listen(EVENTS_CHANNEL):
            if not self._running:
                break
            try:
                await self.manager.broadcast_text(data)
            except Exception:
                log.exception("broadcast_failed")
