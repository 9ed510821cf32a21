#!/usr/bin/env python3
"""
VenceHoje CLI - Command-line interface for tracking bills and due dates.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    profiles     Manage profiles
    categories   Manage bill categories
    bills        Add, list and pay bills
    dashboard    Per-category spending totals
    backup       CSV export and restore
    settings     Reminder preferences
    notify       Run the reminder loop
    migrate      Database migrations

Examples:
    python -m cli bills add "Rent" 1500.00 2024-10-01 --category Housing
    python -m cli bills list
    python -m cli bills pay 3
    python -m cli dashboard show --mode pending
    python -m cli notify run
    python -m cli migrate apply
"""

import sys
import argparse
from cli import bills, categories, profiles, dashboard, backup, settings, notify, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging

_SERVICE_COMMANDS = (
    "profiles",
    "categories",
    "bills",
    "dashboard",
    "backup",
    "settings",
    "notify",
)


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="VenceHoje - Bill tracking and due-date reminders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    profiles.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    bills.setup_parser(subparsers)
    dashboard.setup_parser(subparsers)
    backup.setup_parser(subparsers)
    settings.setup_parser(subparsers)
    notify.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()

            setup_logging(config)

            # Service commands bring the schema up to date first
            # migrate works on the db_manager directly
            if args.command in _SERVICE_COMMANDS:
                services = Services(config)
                migrate.apply_pending(services.db_manager)
                args.func(args, services)
            elif args.command == "migrate":
                db_manager = DatabaseManager(config)
                args.func(args, db_manager)
            else:
                args.func(args)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
