from __future__ import annotations

import asyncio
import datetime
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .dates import next_daily_run, parse_time, utc_now

logger = logging.getLogger(__name__)


@dataclass
class ScheduledJob:
    name: str
    run_time: datetime.time
    func: Callable[[], Awaitable[object]]
    next_run: Optional[datetime.datetime] = None


class DailyScheduler:
    """Runs async jobs once a day at a fixed business-local wall-clock time.

    The scheduler lives as a single asyncio task next to the request
    handlers. Job failures are logged and never stop the loop.
    """

    def __init__(self) -> None:
        self._jobs: list[ScheduledJob] = []
        self._task: Optional[asyncio.Task] = None

    def add_daily_job(self, name: str, run_time: str, func: Callable[[], Awaitable[object]]) -> ScheduledJob:
        job = ScheduledJob(name=name, run_time=parse_time(run_time), func=func)
        job.next_run = next_daily_run(job.run_time)
        self._jobs.append(job)
        return job

    def start(self) -> None:
        if self._task and not self._task.done():
            return
        self._task = asyncio.create_task(self._run(), name="daily-scheduler")
        logger.info("Scheduler started with %d job(s).", len(self._jobs))

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Scheduler stopped.")

    async def run_pending(self, now: Optional[datetime.datetime] = None) -> int:
        """Run every job whose ``next_run`` has passed; returns how many ran."""
        now = now or utc_now()
        ran = 0
        for job in list(self._jobs):
            if job.next_run and now >= job.next_run:
                await self._safe_run(job)
                job.next_run = next_daily_run(job.run_time, now=now)
                ran += 1
        return ran

    def seconds_until_next(self, now: Optional[datetime.datetime] = None) -> float:
        now = now or utc_now()
        pending = [job.next_run for job in self._jobs if job.next_run]
        if not pending:
            return 60.0
        return max(0.0, (min(pending) - now).total_seconds())

    @staticmethod
    async def _safe_run(job: ScheduledJob) -> None:
        logger.info("Running scheduled job: %s", job.name)
        try:
            await job.func()
        except Exception:
            logger.exception("Scheduled job failed: %s", job.name)

    async def _run(self) -> None:
        while True:
            # Cap the sleep so clock changes are picked up within a minute.
            await asyncio.sleep(min(self.seconds_until_next(), 60.0))
            await self.run_pending()
