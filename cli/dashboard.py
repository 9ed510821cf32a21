#!/usr/bin/env python3

import sys
from datetime import date

from cli.formatting import catalog_for, format_amount
from dashboard import (
    DashboardMode,
    aggregate,
    grand_total,
    monthly_summary,
    percentages,
    sorted_buckets,
)
from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show per-category totals for a month."""
    if not services.profiles.find(args.profile):
        logger.error(f"Profile with ID {args.profile} not found.")
        sys.exit(1)

    today = date.today()
    month = args.month or today.month
    year = args.year or today.year
    if not 1 <= month <= 12:
        logger.error(f"Invalid month: {month}")
        sys.exit(1)

    catalog = catalog_for(services)
    mode = DashboardMode(args.mode)
    bills = services.bills.find_by_profile(args.profile)
    categories = services.categories.find_by_profile(args.profile)

    totals = aggregate(
        bills,
        categories,
        month,
        year,
        mode,
        fees_label=catalog.dashboard.fees,
        default_category=catalog.dashboard.other,
    )
    shares = percentages(totals)

    label = catalog.dashboard.paid if mode == DashboardMode.PAID else catalog.dashboard.pending
    logger.info(f"\n{label} - {month:02d}/{year}")
    logger.info("=" * 60)

    if not totals:
        logger.info("Nothing to show for this month.")
    else:
        for name, amount in sorted_buckets(totals):
            logger.info(
                f"{name:<30} {format_amount(amount, catalog):>16} {shares[name]:>6.1f}%"
            )
        logger.info("-" * 60)
        logger.info(f"{'Total':<30} {format_amount(grand_total(totals), catalog):>16}")

    if month == today.month and year == today.year:
        summary = monthly_summary(bills, today, history=mode == DashboardMode.PAID)
        logger.info(f"\nThis month: {format_amount(summary.total, catalog)}")
        if summary.fees > 0:
            logger.info(f"{catalog.dashboard.fees}: {format_amount(summary.fees, catalog)}")


def setup_parser(subparsers):
    """Setup dashboard subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "dashboard",
        help="Per-category spending totals",
        description="Show paid or pending totals per category for a month",
    )

    dashboard_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available dashboard commands",
        dest="subcommand",
        required=True,
    )

    show_parser = dashboard_subparsers.add_parser("show", help="Show monthly totals")
    show_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    show_parser.add_argument("--month", type=int, help="Month (1-12, default: current)")
    show_parser.add_argument("--year", type=int, help="Year (default: current)")
    show_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DashboardMode],
        default=DashboardMode.PAID.value,
        help="Paid history or pending bills",
    )
    show_parser.set_defaults(func=cmd_show)
