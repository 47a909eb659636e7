"""Scheduler service for periodic reconciliation runs."""

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from reconciler.logging import get_logger

logger = get_logger(__name__, component="scheduler")

JOB_ID = "company-reconcile"
JOB_NAME = "Company Opening Reconciliation"


class SchedulerService:
    """
    Wraps APScheduler to trigger reconciliation runs at a fixed interval.

    Runs execute on a BackgroundScheduler worker thread so the main thread
    stays free to handle signals and coordinate shutdown.
    """

    def __init__(
        self,
        run_callable: Callable[[], Any],
        interval_seconds: int,
        shutdown_event: Optional[threading.Event] = None,
        run_immediately: bool = True,
    ):
        """
        Initialize the scheduler service.

        Args:
            run_callable: Called on every scheduled run (e.g. pipeline.run_once)
            interval_seconds: Interval between runs in seconds
            shutdown_event: Set on shutdown so the main thread can stop waiting
            run_immediately: Start the first run at startup rather than after
                one full interval
        """
        self.run_callable = run_callable
        self.interval_seconds = interval_seconds
        self.shutdown_event = shutdown_event
        self.run_immediately = run_immediately

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,
                "coalesce": True,
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def start(self) -> None:
        """Register the reconciliation job and start the scheduler."""
        trigger = IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc)

        job_kwargs = {}
        next_run = None
        if self.run_immediately:
            next_run = datetime.now(timezone.utc)
            job_kwargs["next_run_time"] = next_run

        self.scheduler.add_job(
            func=self.run_callable,
            trigger=trigger,
            id=JOB_ID,
            name=JOB_NAME,
            replace_existing=True,
            **job_kwargs,
        )
        self.scheduler.start()

        logger.info(
            f"Scheduler started with interval: {self.interval_seconds} seconds",
            extra={
                "event": "scheduler.started",
                "interval_seconds": self.interval_seconds,
                "next_run_time": next_run.isoformat() if next_run else None,
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop the scheduler.

        Args:
            wait: If True, wait for a running reconciliation to finish
        """
        logger.info(
            "Shutting down scheduler",
            extra={"event": "scheduler.stopping", "wait_for_jobs": wait},
        )

        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)

        if self.shutdown_event:
            self.shutdown_event.set()

        logger.info("Scheduler shutdown complete", extra={"event": "scheduler.stopped"})
