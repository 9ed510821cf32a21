#!/usr/bin/env python3

import sys

from apscheduler.schedulers.blocking import BlockingScheduler

from cli.formatting import catalog_for
from notifiers import get_notification_provider
from reminders.scheduler import CheckScheduler
from reminders.worker import ReminderWorker
from logger import get_logger

logger = get_logger()


def _build_worker(services, scheduler=None):
    try:
        notifier = get_notification_provider(services.config)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    return ReminderWorker(services, notifier, catalog_for(services), scheduler)


def cmd_check(args, services):
    """Run a single reminder check without scheduling another."""
    worker = _build_worker(services)
    decision = worker.run_check()

    if decision.notify:
        logger.info(f"Notified: {decision.message}")
    elif decision.sleeping:
        logger.info("Quiet hours; no reminder sent.")
    else:
        logger.info(f"No reminder due ({decision.eligible_count} bill(s) pending).")


def cmd_run(args, services):
    """Run the reminder loop in the foreground until interrupted."""
    scheduler = BlockingScheduler()
    check_scheduler = CheckScheduler(scheduler)
    worker = _build_worker(services, check_scheduler)

    check_scheduler.ensure_scheduled(worker.run_check)
    logger.info("Reminder loop started. Press Ctrl+C to stop.")

    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Reminder loop stopped.")


def cmd_test(args, services):
    """Send a test notification."""
    worker = _build_worker(services)
    worker.send_test()
    logger.info("✓ Test notification sent.")


def setup_parser(subparsers):
    """Setup notify subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "notify",
        help="Run the reminder loop",
        description="Check for due bills and send reminders",
    )

    notify_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available notify commands",
        dest="subcommand",
        required=True,
    )

    check_parser = notify_subparsers.add_parser("check", help="Run one reminder check")
    check_parser.set_defaults(func=cmd_check)

    run_parser = notify_subparsers.add_parser(
        "run", help="Run the reminder loop until interrupted"
    )
    run_parser.set_defaults(func=cmd_run)

    test_parser = notify_subparsers.add_parser("test", help="Send a test notification")
    test_parser.set_defaults(func=cmd_test)
