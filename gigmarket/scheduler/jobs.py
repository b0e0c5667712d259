"""APScheduler instance and scheduler management.

Holds the process-wide ``BackgroundScheduler`` started by the FastAPI
lifespan, plus helpers for one-shot jobs (mining session completion).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)

# Module-level scheduler instance (singleton)
scheduler = BackgroundScheduler()


def start_scheduler() -> None:
    """Start the background scheduler if it is not already running."""
    if not scheduler.running:
        scheduler.start()
        logger.info("scheduler_started")


def shutdown_scheduler() -> None:
    """Shutdown the scheduler gracefully.

    Called during FastAPI lifespan cleanup.
    """
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("scheduler_stopped")


def is_scheduler_running() -> bool:
    """Check if the scheduler is currently running."""
    return scheduler.running


def schedule_once(
    job_id: str,
    run_at: datetime,
    func: Callable[..., Any],
    args: list[Any] | None = None,
) -> None:
    """Schedule *func* to run once at *run_at*, replacing any job with *job_id*."""
    scheduler.add_job(
        func,
        DateTrigger(run_date=run_at),
        id=job_id,
        args=args or [],
        replace_existing=True,
    )
    logger.info(
        "job_scheduled",
        extra={"job_id": job_id, "run_at": run_at.isoformat()},
    )


def cancel_job(job_id: str) -> bool:
    """Remove a pending job.  Returns False if it had already run or never existed."""
    try:
        scheduler.remove_job(job_id)
    except JobLookupError:
        return False
    logger.info("job_cancelled", extra={"job_id": job_id})
    return True
