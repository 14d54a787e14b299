"""
Repeating timer that drives polling cycles.
"""
import asyncio
import logging
import math
from typing import Awaitable, Callable, Optional

from .models import PollResult
from .poller import Poller

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Optional[Exception], Optional[PollResult]], Awaitable[object]]


class PollingScheduler:
    """Fires a polling cycle every ``interval`` seconds until stopped.

    Cycles never overlap. When a cycle takes longer than the interval the
    ticks it missed are skipped, so results reach the callback in the order
    the cycles were fired.
    """

    def __init__(self, poller: Poller, interval: float):
        if interval <= 0:
            raise ValueError("Polling interval must be greater than zero")
        self.poller = poller
        self.interval = interval
        self.cycle_count = 0
        self.stop_event = asyncio.Event()
        self.task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def start_polling(self, on_result: ResultCallback) -> asyncio.Task:
        """Start the ticker; returns the task driving it."""
        if self.running:
            raise RuntimeError("Polling already started")
        self.stop_event.clear()
        self.task = asyncio.create_task(self._run(on_result))
        logger.info(f"Polling started (every {self.interval:g}s)")
        return self.task

    def stop(self) -> None:
        """Stop future firings. A cycle already in flight still completes."""
        self.stop_event.set()

    async def run_cycle(self, on_result: ResultCallback) -> None:
        """Run one cycle and deliver its outcome to *on_result*."""
        self.cycle_count += 1
        logger.debug(f"Starting polling cycle #{self.cycle_count}")

        try:
            error, result = await self.poller.poll()
        except Exception as e:
            logger.error(f"Polling cycle #{self.cycle_count} crashed: {e}", exc_info=True)
            error, result = e, None

        try:
            await on_result(error, result)
        except Exception as e:
            logger.error(f"Error handling polling result: {e}", exc_info=True)

    async def _run(self, on_result: ResultCallback) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + self.interval

        while not self.stop_event.is_set():
            delay = next_fire - loop.time()
            if delay > 0:
                try:
                    await asyncio.wait_for(self.stop_event.wait(), timeout=delay)
                    break
                except asyncio.TimeoutError:
                    pass

            await self.run_cycle(on_result)

            next_fire += self.interval
            now = loop.time()
            if next_fire < now:
                missed = math.ceil((now - next_fire) / self.interval)
                logger.warning(
                    f"Polling cycle overran the {self.interval:g}s interval, "
                    f"skipping {missed} tick(s)"
                )
                next_fire += missed * self.interval

        logger.info("Polling stopped")
