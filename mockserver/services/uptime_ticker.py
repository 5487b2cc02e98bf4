"""Background task that advances the registry uptime once per interval."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, Optional

from mockserver.core.request_context import request_context
from mockserver.core.tasks import monitor_task
from mockserver.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


class UptimeTicker:
    """Single driver of ``SessionRegistry.tick``."""

    def __init__(
        self,
        registry: SessionRegistry,
        *,
        interval: float = 1.0,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        self._registry = registry
        self._interval = interval
        self._on_error = on_error
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="uptime-ticker")
        monitor_task(self._task, name="uptime-ticker", logger=logger, on_error=self._on_error)
        logger.info("Uptime ticker started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            # a crashed task was already reported by monitor_task
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Uptime ticker stopped")

    async def _run(self) -> None:
        with request_context("bg:ticker"):
            loop = asyncio.get_running_loop()
            next_at = loop.time() + self._interval
            while True:
                # sleep to an absolute deadline so handler latency does not drift the count
                await asyncio.sleep(max(0.0, next_at - loop.time()))
                next_at += self._interval
                elapsed = await self._registry.tick()
                logger.debug("Uptime %ss", elapsed)
