"""Single-slot scheduling of the next reminder check.

The reminder loop is self-perpetuating: every run schedules exactly one
future run. All runs share one job id, so scheduling a new check replaces
whatever check was pending and there is never more than one in the queue.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from apscheduler.schedulers.base import BaseScheduler

from logger import get_logger

logger = get_logger()

JOB_ID = "vencehoje_loop"


class CheckScheduler:
    """Keeps at most one pending reminder check on an APScheduler scheduler.

    Args:
        scheduler: Any APScheduler scheduler (blocking in the CLI, background
            in tests).
        job_id: Identity shared by every scheduled check.
    """

    def __init__(self, scheduler: BaseScheduler, job_id: str = JOB_ID):
        self.scheduler = scheduler
        self.job_id = job_id

    def schedule_next(
        self,
        check: Callable[[], object],
        delay: timedelta,
        now: Optional[datetime] = None,
    ) -> datetime:
        """Schedule ``check`` to run after ``delay``, replacing any pending check.

        Returns:
            The time the check will run at.
        """
        run_at = (now or datetime.now()) + delay
        self.scheduler.add_job(
            check,
            trigger="date",
            run_date=run_at,
            id=self.job_id,
            replace_existing=True,
            misfire_grace_time=None,
        )
        logger.info(f"Next reminder check at {run_at:%Y-%m-%d %H:%M}")
        return run_at

    def ensure_scheduled(
        self, check: Callable[[], object], now: Optional[datetime] = None
    ) -> bool:
        """Queue an immediate check unless one is already pending.

        Used at startup: an existing loop is kept rather than reset.

        Returns:
            True if a new check was queued.
        """
        if self.scheduler.get_job(self.job_id) is not None:
            logger.debug("Reminder check already pending; keeping it")
            return False

        self.scheduler.add_job(
            check,
            trigger="date",
            run_date=now or datetime.now(),
            id=self.job_id,
            misfire_grace_time=None,
        )
        return True

    def pending_run_time(self) -> Optional[datetime]:
        """When the pending check will run, or None if nothing is scheduled."""
        job = self.scheduler.get_job(self.job_id)
        if job is None:
            return None
        return getattr(job, "next_run_time", None)

    def cancel(self) -> None:
        """Drop the pending check, if any."""
        if self.scheduler.get_job(self.job_id) is not None:
            self.scheduler.remove_job(self.job_id)
