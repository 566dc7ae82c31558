"""APScheduler adapter - delivers focus timer messages onto an asyncio queue."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from focusbar.focus import ClearNudge, Tick

logger = logging.getLogger(__name__)


class SchedulerTimer:
    """
    APScheduler-backed timer.

    Implements TimerScheduler protocol. Jobs only enqueue messages, so the
    queue's consumer stays the single owner of focus state.
    """

    def __init__(self, scheduler: AsyncIOScheduler, queue: asyncio.Queue):
        self.scheduler = scheduler
        self.queue = queue

    @staticmethod
    def _tick_job_id(generation: int) -> str:
        return f"focus_tick_{generation}"

    @staticmethod
    def _nudge_job_id(generation: int) -> str:
        return f"focus_nudge_clear_{generation}"

    async def _post(self, message) -> None:
        self.queue.put_nowait(message)

    def start_ticks(self, generation: int, interval: float) -> None:
        """Deliver a Tick every `interval` seconds until cancelled."""
        self.scheduler.add_job(
            self._post,
            IntervalTrigger(seconds=interval),
            args=[Tick(generation)],
            id=self._tick_job_id(generation),
            coalesce=True,
            max_instances=1,
            replace_existing=True,
        )

    def schedule_nudge_clear(self, generation: int, delay: float) -> None:
        """Deliver one ClearNudge after `delay` seconds."""
        self.scheduler.add_job(
            self._post,
            DateTrigger(run_date=datetime.now(timezone.utc) + timedelta(seconds=delay)),
            args=[ClearNudge(generation)],
            id=self._nudge_job_id(generation),
            replace_existing=True,
            # Run even when the loop stalled past the due time
            misfire_grace_time=None,
        )

    def cancel(self, generation: int) -> None:
        """Remove both jobs for a session. Already-finished jobs are ignored."""
        for job_id in (self._tick_job_id(generation), self._nudge_job_id(generation)):
            try:
                self.scheduler.remove_job(job_id)
            except JobLookupError:
                logger.debug(f"No scheduled job {job_id} to cancel")
