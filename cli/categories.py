#!/usr/bin/env python3

import sys
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the categories of a profile."""
    categories = services.categories.find_by_profile(args.profile)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        built_in = " (built-in)" if category.is_built_in else ""
        logger.info(f"ID: {category.id}  {category.icon} {category.name}{built_in}")
        logger.info(f"Color: {category.color_hex}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category in a profile."""
    if not services.profiles.find(args.profile):
        logger.error(f"Profile with ID {args.profile} not found.")
        sys.exit(1)

    try:
        category = services.categories.create(
            args.profile, args.name, args.color, args.icon
        )

        logger.info(f"\n✓ Category created successfully with ID: {category.id}")
        logger.info(f"  Name: {category.name}")
        logger.info(f"  Icon: {category.icon}")

    except Exception as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)


def cmd_delete(args, services):
    """Delete a category by ID."""
    category_id = args.category_id

    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)

    if category.is_built_in:
        logger.error(f"Category '{category.name}' is built-in and cannot be deleted.")
        sys.exit(1)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        if services.categories.delete(category_id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage bill categories",
        description="Create, list, and delete bill categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List categories")
    list_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser("create", help="Create a category")
    create_parser.add_argument("name", help="Category name")
    create_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    create_parser.add_argument("--color", default="#9E9E9E", help="Color as #RRGGBB")
    create_parser.add_argument("--icon", default="label", help="Emoji or icon name")
    create_parser.set_defaults(func=cmd_create)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", type=int, help="Category ID to delete")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)
