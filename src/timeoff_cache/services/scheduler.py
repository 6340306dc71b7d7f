"""Periodic background refresh owned by a store."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class PeriodicRefresher:
    """Runs ``callback`` every ``interval`` seconds on the event loop.

    At most one task is live per refresher: ``start()`` on a running
    refresher is a no-op. ``stop()`` cancels the task and waits for it.
    A failing callback is logged and the loop keeps going.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        interval: float,
        name: str = "refresher",
        run_immediately: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be greater than 0")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._run_immediately = run_immediately
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Schedule the refresh loop.

        Returns:
            True if a new task was started, False if one was already live
        """
        if self.is_running:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)
        logger.debug("refresher_started", refresher=self._name, interval=self._interval)
        return True

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("refresher_stopped", refresher=self._name)

    async def _run(self) -> None:
        if self._run_immediately:
            await self._tick()
        while True:
            await asyncio.sleep(self._interval)
            await self._tick()

    async def _tick(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.exception("poll_failed", refresher=self._name)
