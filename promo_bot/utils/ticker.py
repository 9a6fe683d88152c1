# promo_bot/utils/ticker.py
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable

log = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class Ticker:
    """
    Repeating asyncio task: sleep `interval_seconds`, await `callback()`, repeat.

    The callback is looked up on every cycle, so pass a bound method to always
    act on the owner's current state. `stop()` cancels and awaits the task:
    once it returns, no further tick runs.
    """

    def __init__(self, callback: TickCallback, interval_seconds: float, *, name: str = "ticker") -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds!r}")
        self.callback = callback
        self.interval_seconds = float(interval_seconds)
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self.name)
        log.debug("Ticker %s started every %ss", self.name, self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return

        task.cancel()
        if task is asyncio.current_task():
            # stopped from inside its own tick: the CancelledError lands at the next await
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task
        log.debug("Ticker %s stopped", self.name)

    async def set_interval(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds!r}")
        if float(interval_seconds) == self.interval_seconds:
            return

        was_running = self.running
        await self.stop()
        self.interval_seconds = float(interval_seconds)
        if was_running:
            self.start()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.callback()
            except Exception:
                log.exception("Tick failed (%s)", self.name)
