from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from splitshare.config import Settings
from splitshare.logging import get_logger


class DebounceScheduler(Protocol):
    def schedule(self, job_id: str, delay: timedelta, callback: Callable[[], None]) -> None: ...

    def cancel(self, job_id: str) -> None: ...


class APSchedulerDebounce:
    """Delayed callbacks on an AsyncIOScheduler.

    Scheduling a job id that is already pending replaces it. Callbacks are
    wrapped in a coroutine so the executor runs them on the event loop
    thread instead of a worker thread.
    """

    def __init__(self, scheduler: AsyncIOScheduler) -> None:
        self._scheduler = scheduler
        self._log = get_logger(__name__)

    def schedule(self, job_id: str, delay: timedelta, callback: Callable[[], None]) -> None:
        async def _run() -> None:
            callback()

        self.cancel(job_id)
        self._scheduler.add_job(
            _run,
            DateTrigger(run_date=datetime.now(timezone.utc) + delay),
            id=job_id,
            misfire_grace_time=None,
        )
        self._log.debug("scheduler.job.scheduled", job_id=job_id, delay_ms=delay / timedelta(milliseconds=1))

    def cancel(self, job_id: str) -> None:
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            return
        self._log.debug("scheduler.job.cancelled", job_id=job_id)


def setup_scheduler(settings: Settings) -> AsyncIOScheduler:
    """Start an AsyncIOScheduler; must be called with a running event loop."""
    scheduler = AsyncIOScheduler(timezone=settings.tz)
    scheduler.start()
    return scheduler
