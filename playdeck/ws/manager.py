from typing import Set
from fastapi import WebSocket
import asyncio
import logging

log = logging.getLogger("ws")


class WebSocketManager:
    def __init__(self) -> None:
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def count(self) -> int:
        return len(self._connections)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        async with self._lock:
            self._connections.add(ws)
        log.info("ws_connected", extra={"clients": len(self._connections)})

    async def disconnect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(ws)
        log.info("ws_disconnected", extra={"clients": len(self._connections)})

    async def broadcast(self, message: dict) -> None:
        async with self._lock:
            dead = []
            for ws in self._connections:
                try:
                    await ws.send_json(message)
                except Exception:
                    dead.append(ws)

            for ws in dead:
                self._connections.discard(ws)

    async def broadcast_text(self, text: str) -> None:
        async with self._lock:
            dead = []
            for ws in self._connections:
                try:
                    await ws.send_text(text)
                except Exception:
                    dead.append(ws)

            for ws in dead:
                self._connections.discard(ws)
