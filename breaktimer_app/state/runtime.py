"""
Periodic tick scheduling on the asyncio event loop.

A single repeating task drives the engine. Callbacks run on the loop
thread and never overlap, so session state needs no locking.
"""

import asyncio
from typing import Callable, Optional

from ..logging.config import get_logger

logger = get_logger(__name__)


class TickScheduler:
    """Repeating task with an explicit cancel handle."""

    def __init__(self, interval_seconds: float, callback: Callable[[], object]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Begin ticking. No-op when already active.

        Returns:
            False when there is no running event loop to schedule on
        """
        if self.active:
            return True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("No running event loop; ticking not started")
            return False

        self._task = loop.create_task(self._run())
        logger.debug("Tick scheduler started", interval_seconds=self.interval_seconds)
        return True

    def cancel(self) -> None:
        """Cancel the pending schedule. Safe to call when inactive."""
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Tick scheduler cancelled")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.callback()
            except Exception as e:
                logger.error("Tick callback failed", error=str(e), exc_info=True)
