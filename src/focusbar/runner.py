"""Focus runner - the single owner that applies queued messages to a FocusTimer."""

import asyncio
import logging
from dataclasses import dataclass

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .adapters.scheduler_timer import SchedulerTimer
from .config import LiveSettings
from .focus import FocusTimer, StopFocus
from .ports import FocusSettings, ReminderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shutdown:
    """Stop the runner after ending any active session."""

    pass


class FocusRunner:
    """
    Drains a message queue into one FocusTimer.

    Commands from the caller and messages from timer jobs share the queue,
    so start, stop and tick are never interleaved.
    """

    def __init__(self, timer: FocusTimer, queue: asyncio.Queue):
        self.timer = timer
        self.queue = queue

    def post(self, message) -> None:
        """Enqueue a message for the owner loop."""
        self.queue.put_nowait(message)

    async def run(self) -> None:
        """Process messages until Shutdown."""
        while True:
            message = await self.queue.get()
            try:
                if isinstance(message, Shutdown):
                    if self.timer.is_focusing:
                        self.timer.handle(StopFocus())
                    logger.info("Focus runner shut down")
                    return
                self.timer.handle(message)
            finally:
                self.queue.task_done()


def create_runner(
    store: ReminderStore,
    settings: FocusSettings | None = None,
) -> tuple[FocusRunner, AsyncIOScheduler]:
    """Wire a FocusRunner to an APScheduler timer. Call inside a running loop."""
    queue: asyncio.Queue = asyncio.Queue()
    scheduler = AsyncIOScheduler()
    timer = FocusTimer(
        store=store,
        settings=settings or LiveSettings(),
        timer=SchedulerTimer(scheduler, queue),
    )
    return FocusRunner(timer, queue), scheduler
