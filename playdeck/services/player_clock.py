from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

log = logging.getLogger("player.clock")

TickCallback = Callable[[], Union[None, Awaitable[None]]]


class PlayerClock:
    """
    Periodic ticker running as a single asyncio task.

    Callbacks may be plain functions or coroutine functions. A failing
    callback is logged and the clock keeps firing.
    """

    def __init__(self, interval_s: float = 1.0):
        self.interval_s = interval_s
        self.ticks: int = 0
        self._callbacks: List[TickCallback] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def on_tick(self, callback: TickCallback) -> None:
        self._callbacks.append(callback)
        if not self.running:
            self._task = asyncio.create_task(self._loop())
            log.info("clock_started", extra={"interval_s": self.interval_s})

    async def cancel(self) -> None:
        self._callbacks.clear()
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("clock_cancelled", extra={"ticks": self.ticks})

    async def fire(self) -> None:
        """Delivers one tick to every callback right away."""
        self.ticks += 1
        for cb in list(self._callbacks):
            try:
                result = cb()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                log.exception("clock_callback_failed")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            await self.fire()
