"""Fixed-interval auto-refresh for views."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..chat.retry import Sleep

logger = logging.getLogger(__name__)


class Poller:
    """Re-invoke ``callback`` every ``interval`` seconds while ``should_run()`` holds."""

    def __init__(
        self,
        interval: float,
        callback: Callable[[], Awaitable[object]],
        should_run: Callable[[], bool] = lambda: True,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.interval = interval
        self._callback = callback
        self._should_run = should_run
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _loop(self) -> None:
        while True:
            await self._sleep(self.interval)
            if not self._should_run():
                continue
            try:
                await self._callback()
            except Exception:
                logger.exception("Auto-refresh callback failed")
