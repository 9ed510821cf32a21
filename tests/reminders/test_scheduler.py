"""Tests for single-slot check scheduling."""

from datetime import datetime, timedelta

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from reminders.scheduler import JOB_ID, CheckScheduler

NOW = datetime(2030, 1, 1, 8, 0)


def noop():
    pass


def other_noop():
    pass


@pytest.fixture
def scheduler():
    """A started but paused APScheduler so nothing actually runs."""
    background = BackgroundScheduler(timezone="UTC")
    background.start(paused=True)
    yield background
    background.shutdown(wait=False)


class TestCheckScheduler:
    """Tests for CheckScheduler."""

    def test_schedule_next(self, scheduler):
        """Test a check is scheduled after the given delay."""
        checks = CheckScheduler(scheduler)

        run_at = checks.schedule_next(noop, timedelta(hours=1), NOW)

        assert run_at == NOW + timedelta(hours=1)
        assert checks.pending_run_time().replace(tzinfo=None) == run_at

    def test_schedule_next_replaces_pending(self, scheduler):
        """Test scheduling again keeps exactly one pending check, the newest."""
        checks = CheckScheduler(scheduler)

        checks.schedule_next(noop, timedelta(hours=4), NOW)
        checks.schedule_next(other_noop, timedelta(hours=1), NOW)

        jobs = scheduler.get_jobs()
        assert len(jobs) == 1
        assert jobs[0].id == JOB_ID
        assert jobs[0].func is other_noop
        assert jobs[0].next_run_time.replace(tzinfo=None) == NOW + timedelta(hours=1)

    def test_ensure_scheduled_keeps_existing(self, scheduler):
        """Test startup does not reset a loop that is already pending."""
        checks = CheckScheduler(scheduler)
        checks.schedule_next(noop, timedelta(hours=2), NOW)

        queued = checks.ensure_scheduled(other_noop, NOW)

        assert queued is False
        assert len(scheduler.get_jobs()) == 1
        assert checks.pending_run_time().replace(tzinfo=None) == NOW + timedelta(hours=2)

    def test_ensure_scheduled_queues_when_empty(self, scheduler):
        """Test startup queues an immediate check when nothing is pending."""
        checks = CheckScheduler(scheduler)

        queued = checks.ensure_scheduled(noop, NOW)

        assert queued is True
        assert checks.pending_run_time().replace(tzinfo=None) == NOW

    def test_cancel(self, scheduler):
        """Test cancelling drops the pending check and is safe to repeat."""
        checks = CheckScheduler(scheduler)
        checks.schedule_next(noop, timedelta(hours=1), NOW)

        checks.cancel()
        checks.cancel()

        assert checks.pending_run_time() is None
        assert scheduler.get_jobs() == []
