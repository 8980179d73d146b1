"""Periodic scheduler for sync and dispatch cycles.

The loop waits for whichever comes first: the next timer firing or a stop
request. A cycle (sync then dispatch) always runs to completion; a stop
requested mid-cycle is honoured once the loop is back to waiting. Ticks missed
while a long cycle was running collapse into one immediate re-run.
"""

import asyncio
import logging
from enum import Enum

from .dispatcher import NotificationDispatcher
from .exceptions import FetchError
from .sync import SyncEngine

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class SchedulerEvent(Enum):
    TIMER_FIRED = "timer_fired"
    CANCEL_REQUESTED = "cancel_requested"


class Scheduler:
    """Runs sync + dispatch every `update_interval` seconds until stopped."""

    def __init__(
        self,
        engine: SyncEngine,
        dispatcher: NotificationDispatcher,
        update_interval: float = 60,
    ):
        self.engine = engine
        self.dispatcher = dispatcher
        self.update_interval = update_interval
        self.state = SchedulerState.IDLE
        self.cycles_run = 0
        self._stop_event: asyncio.Event | None = None
        self._stop_requested = False

    def request_stop(self) -> None:
        """Ask the loop to stop at the next wait point."""
        self._stop_requested = True
        if self._stop_event is not None:
            self._stop_event.set()

    async def run_cycle(self) -> int:
        """Run one sync followed by dispatch of the new ids.

        Returns:
            Number of notifications sent.

        Raises:
            FetchError: If the alert fetch failed; nothing is dispatched.
        """
        new_ids = await self.engine.sync()
        if not new_ids:
            return 0
        return self.dispatcher.dispatch(new_ids)

    async def _next_event(self, delay: float) -> SchedulerEvent:
        """Wait for the timer or a stop request, whichever resolves first."""
        if self._stop_event.is_set():
            return SchedulerEvent.CANCEL_REQUESTED
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return SchedulerEvent.TIMER_FIRED
        return SchedulerEvent.CANCEL_REQUESTED

    async def run(self) -> None:
        """Run cycles until a stop is requested.

        The first cycle starts immediately.
        """
        loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        if self._stop_requested:
            self._stop_event.set()

        logger.info(f"Scheduler started (interval: {self.update_interval}s)")
        next_tick = loop.time()

        while True:
            self.state = SchedulerState.IDLE
            event = await self._next_event(max(0.0, next_tick - loop.time()))
            if event is SchedulerEvent.CANCEL_REQUESTED:
                break

            self.state = SchedulerState.RUNNING
            try:
                await self.run_cycle()
            except FetchError as e:
                logger.error(f"Failed to fetch alerts, retrying next interval: {e}")
            except Exception as e:
                logger.exception(f"Error during sync cycle: {e}")
            self.cycles_run += 1

            next_tick += self.update_interval
            now = loop.time()
            if next_tick <= now:
                # Coalesce missed ticks into a single immediate run
                next_tick = now

        self.state = SchedulerState.STOPPED
        logger.info("Scheduler stopped")
