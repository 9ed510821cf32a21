#!/usr/bin/env python3

import sys

from reminders.policy import Insistence
from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show reminder preferences."""
    notify_time = services.preferences.get_notify_time()
    insistence = services.preferences.get_insistence()

    logger.info("\nReminder settings:")
    logger.info(f"  Notify time: {notify_time:%H:%M}")
    logger.info(f"  Insistence:  {insistence.value}")
    logger.info(f"  Provider:    {services.config.notification_provider}")
    logger.info(f"  Locale:      {services.config.locale}")


def cmd_set_time(args, services):
    """Set the daily notification time."""
    try:
        notify_time = services.preferences.set_notify_time(args.time)
        logger.info(f"✓ Notify time set to {notify_time:%H:%M}")
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


def cmd_set_insistence(args, services):
    """Set how insistently reminders repeat."""
    try:
        insistence = services.preferences.set_insistence(args.level)
        logger.info(f"✓ Insistence set to {insistence.value}")
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


def setup_parser(subparsers):
    """Setup settings subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "settings",
        help="Reminder preferences",
        description="Show or change reminder time and insistence",
    )

    settings_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available settings commands",
        dest="subcommand",
        required=True,
    )

    show_parser = settings_subparsers.add_parser("show", help="Show settings")
    show_parser.set_defaults(func=cmd_show)

    time_parser = settings_subparsers.add_parser(
        "set-time", help="Set the daily notification time"
    )
    time_parser.add_argument("time", help="Time of day as HH:MM")
    time_parser.set_defaults(func=cmd_set_time)

    insistence_parser = settings_subparsers.add_parser(
        "set-insistence", help="Set reminder insistence"
    )
    insistence_parser.add_argument(
        "level", choices=[level.value for level in Insistence], help="Insistence level"
    )
    insistence_parser.set_defaults(func=cmd_set_insistence)
