#!/usr/bin/env python3

import sys
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all profiles."""
    profiles = services.profiles.find_all()

    logger.info("\nProfiles:")
    logger.info("=" * 80)
    for profile in profiles:
        marker = " (main)" if profile.is_main else ""
        pending = services.bills.find_by_profile(profile.id, paid=False)
        logger.info(f"ID: {profile.id}  {profile.name}{marker}")
        logger.info(f"Color: {profile.color_hex}  Pending bills: {len(pending)}")
        logger.info("-" * 80)

    logger.info(f"\nTotal profiles: {len(profiles)}")


def cmd_create(args, services):
    """Create a new profile with the built-in categories."""
    try:
        profile = services.profiles.create(args.name, args.color)
        logger.info(f"\n✓ Profile created successfully with ID: {profile.id}")
        logger.info(f"  Name: {profile.name}")
    except Exception as e:
        logger.error(f"Error creating profile: {e}")
        sys.exit(1)


def cmd_rename(args, services):
    """Rename (and optionally recolor) a profile."""
    profile = services.profiles.find(args.profile_id)
    if not profile:
        logger.error(f"Profile with ID {args.profile_id} not found.")
        sys.exit(1)

    try:
        updated = services.profiles.update(
            profile.id, args.name, args.color or profile.color_hex
        )
        logger.info(f"✓ Profile {updated.id} is now '{updated.name}'.")
    except Exception as e:
        logger.error(f"Error updating profile: {e}")
        sys.exit(1)


def cmd_delete(args, services):
    """Delete a profile together with its bills and categories."""
    profile = services.profiles.find(args.profile_id)
    if not profile:
        logger.error(f"Profile with ID {args.profile_id} not found.")
        sys.exit(1)

    bills = services.bills.find_by_profile(profile.id)
    logger.info("\nProfile to delete:")
    logger.info(f"  ID: {profile.id}")
    logger.info(f"  Name: {profile.name}")
    logger.info(f"  This also deletes ALL {len(bills)} bill(s) and categories of the profile.")

    if not args.yes:
        confirm = input("\nThis cannot be undone. Continue? (yes/no): ").strip().lower()
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        if services.profiles.delete(profile.id):
            logger.info(f"✓ Profile '{profile.name}' deleted successfully.")
        else:
            logger.error("Failed to delete profile.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting profile: {e}")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup profiles subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "profiles",
        help="Manage profiles",
        description="Create, rename and delete profiles (e.g. household members)",
    )

    profiles_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available profile commands",
        dest="subcommand",
        required=True,
    )

    list_parser = profiles_subparsers.add_parser("list", help="List all profiles")
    list_parser.set_defaults(func=cmd_list)

    create_parser = profiles_subparsers.add_parser("create", help="Create a profile")
    create_parser.add_argument("name", help="Profile name")
    create_parser.add_argument("--color", default="#FBC02D", help="Color as #RRGGBB")
    create_parser.set_defaults(func=cmd_create)

    rename_parser = profiles_subparsers.add_parser("rename", help="Rename a profile")
    rename_parser.add_argument("profile_id", type=int, help="Profile ID")
    rename_parser.add_argument("name", help="New name")
    rename_parser.add_argument("--color", help="New color as #RRGGBB")
    rename_parser.set_defaults(func=cmd_rename)

    delete_parser = profiles_subparsers.add_parser(
        "delete", help="Delete a profile and all of its bills"
    )
    delete_parser.add_argument("profile_id", type=int, help="Profile ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)
