"""Background freshness recomputation for the pantry store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lifecycle.store import ItemLifecycleStore

logger = logging.getLogger(__name__)


class RecomputeScheduler:
    """Keeps item statuses current as time passes.

    Registers two jobs on an APScheduler ``AsyncIOScheduler``: a fixed
    interval refresh that also runs immediately on start, and a refresh at
    every local midnight so day rollover is picked up without waiting for
    the next interval. ``stop()`` disposes of both.
    """

    def __init__(self, store: ItemLifecycleStore, interval_seconds: int = 60) -> None:
        """Initialize the scheduler for a store.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
            from apscheduler.triggers.interval import IntervalTrigger
        except ImportError:
            raise ImportError("apscheduler is required: pip install apscheduler")

        self._store = store
        self._interval_seconds = interval_seconds
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._IntervalTrigger = IntervalTrigger
        self._running = False

    def setup_jobs(self) -> None:
        """Register the interval and midnight refresh jobs."""
        self._scheduler.add_job(
            self._job_recompute,
            trigger=self._IntervalTrigger(seconds=self._interval_seconds),
            id="recompute_interval",
            name="Freshness refresh",
            next_run_time=datetime.now(),
            replace_existing=True,
        )
        logger.info(
            "Registered freshness refresh every %d seconds", self._interval_seconds
        )

        self._scheduler.add_job(
            self._job_recompute,
            trigger=self._CronTrigger(hour=0, minute=0),
            id="recompute_midnight",
            name="Midnight freshness refresh",
            replace_existing=True,
        )
        logger.info("Registered midnight freshness refresh: 0 0 * * *")

    def start(self) -> None:
        """Start the scheduler. Must be called with an event loop running."""
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler and drop its jobs."""
        if self._running:
            self._scheduler.remove_all_jobs()
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        """Return info about scheduled jobs."""
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    async def _job_recompute(self) -> None:
        """Re-evaluate every item in the store."""
        try:
            changed = self._store.refresh()
            logger.debug("Freshness refresh done, %d change(s)", changed)
        except Exception:
            logger.exception("Freshness refresh failed")
