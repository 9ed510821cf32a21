#!/usr/bin/env python3

import sys
from pathlib import Path

from logger import get_logger

logger = get_logger()


def cmd_export(args, services):
    """Export a profile's bills to a CSV file."""
    if not services.profiles.find(args.profile):
        logger.error(f"Profile with ID {args.profile} not found.")
        sys.exit(1)

    try:
        path = services.backups.export_profile(args.profile, args.output)
        logger.info(f"✓ Backup written to {path}")
    except OSError as e:
        logger.error(f"Error writing backup: {e}")
        sys.exit(1)


def cmd_import(args, services):
    """Replace a profile's bills with the contents of a CSV backup."""
    path = Path(args.path)
    if not path.exists():
        logger.error(f"File not found: {path}")
        sys.exit(1)

    profile = services.profiles.find(args.profile)
    if not profile:
        logger.error(f"Profile with ID {args.profile} not found.")
        sys.exit(1)

    if not args.yes:
        confirm = (
            input(
                f"\nThis replaces every bill of profile '{profile.name}'. Continue? (yes/no): "
            )
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Import cancelled.")
            return

    try:
        count = services.backups.import_profile(args.profile, path)
    except Exception as e:
        logger.error(f"Error importing backup: {e}")
        sys.exit(1)

    if count == 0:
        logger.info("No bills found in the file; nothing was changed.")
    else:
        logger.info(f"✓ Imported {count} bill(s) into '{profile.name}'")


def setup_parser(subparsers):
    """Setup backup subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "backup",
        help="CSV export and restore",
        description="Export a profile's bills to CSV or restore them from one",
    )

    backup_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available backup commands",
        dest="subcommand",
        required=True,
    )

    export_parser = backup_subparsers.add_parser("export", help="Export bills to CSV")
    export_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    export_parser.add_argument(
        "-o", "--output", type=Path, help="Destination file (default: backup directory)"
    )
    export_parser.set_defaults(func=cmd_export)

    import_parser = backup_subparsers.add_parser("import", help="Restore bills from CSV")
    import_parser.add_argument("path", help="Backup file to read")
    import_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    import_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    import_parser.set_defaults(func=cmd_import)
