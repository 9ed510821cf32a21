#!/usr/bin/env python3

import sys
from datetime import date

from cli.formatting import (
    bill_amount_text,
    bill_status_text,
    catalog_for,
    format_amount,
    installment_text,
    parse_date_arg,
)
from dashboard import monthly_summary
from models.bill import Bill, RecurrenceUnit
from money import parse_display_amount
from recurrence import requires_amount_confirmation
from logger import get_logger

logger = get_logger()


def _resolve_category_id(services, profile_id, name):
    if not name:
        fallback = services.categories.find_fallback(profile_id)
        return fallback.id if fallback else None

    category = services.categories.find_by_name(profile_id, name)
    if not category:
        logger.error(f"Category '{name}' not found in profile {profile_id}.")
        sys.exit(1)
    return category.id


def cmd_list(args, services):
    """List pending bills, or payment history with --history."""
    catalog = catalog_for(services)
    bills = services.bills.find_by_profile(args.profile, paid=args.history)
    names = {c.id: c.name for c in services.categories.find_by_profile(args.profile)}

    summary = monthly_summary(bills, history=args.history)
    label = "Paid this month" if args.history else "Pending and due this month"
    logger.info(f"\n{label}: {format_amount(summary.total, catalog)}")
    if args.history and summary.fees > 0:
        logger.info(f"Fees this month: {format_amount(summary.fees, catalog)}")

    if not bills:
        logger.info("No bills found.")
        return

    logger.info("=" * 80)
    for bill in bills:
        automatic = "  [automatic]" if bill.is_automatic else ""
        installments = installment_text(bill)
        installments = f"  ({installments})" if installments else ""
        logger.info(f"ID: {bill.id}  {bill.name}{installments}{automatic}")
        logger.info(
            f"  {bill_amount_text(bill, catalog)}  |  "
            f"{bill_status_text(bill, catalog)}  |  "
            f"{names.get(bill.category_id, catalog.dashboard.other)}"
        )
        logger.info("-" * 80)

    logger.info(f"\nTotal bills: {len(bills)}")


def cmd_add(args, services):
    """Add a new bill."""
    due_date = parse_date_arg(args.due_date)
    if due_date is None:
        logger.error(f"Invalid due date '{args.due_date}'. Use YYYY-MM-DD or dd/mm/YYYY.")
        sys.exit(1)

    bill = Bill(
        id=None,
        profile_id=args.profile,
        name=args.name,
        amount=parse_display_amount(args.amount),
        due_date=due_date,
        category_id=_resolve_category_id(services, args.profile, args.category),
        recurrence_unit=RecurrenceUnit.parse(args.unit),
        recurrence_interval=args.every,
        total_installments=args.installments,
        current_installment=args.current,
        is_automatic=args.automatic,
    )

    try:
        created = services.bills.create(bill)
        catalog = catalog_for(services)
        logger.info(f"\n✓ Bill created successfully with ID: {created.id}")
        logger.info(f"  Name: {created.name}")
        logger.info(f"  Amount: {bill_amount_text(created, catalog)}")
        logger.info(f"  Due: {created.due_date.strftime('%d/%m/%Y')}")
    except Exception as e:
        logger.error(f"Error creating bill: {e}")
        sys.exit(1)


def cmd_edit(args, services):
    """Change fields of a pending bill."""
    bill = services.bills.find(args.bill_id)
    if not bill:
        logger.error(f"Bill with ID {args.bill_id} not found.")
        sys.exit(1)

    changes = {}
    if args.name is not None:
        changes["name"] = args.name
    if args.amount is not None:
        changes["amount"] = parse_display_amount(args.amount)
    if args.due_date is not None:
        due_date = parse_date_arg(args.due_date)
        if due_date is None:
            logger.error(f"Invalid due date '{args.due_date}'.")
            sys.exit(1)
        changes["due_date"] = due_date
    if args.category is not None:
        changes["category_id"] = _resolve_category_id(services, bill.profile_id, args.category)
    if args.unit is not None:
        changes["recurrence_unit"] = RecurrenceUnit.parse(args.unit)
    if args.every is not None:
        changes["recurrence_interval"] = args.every
    if args.installments is not None:
        changes["total_installments"] = args.installments
    if args.automatic is not None:
        changes["is_automatic"] = args.automatic == "yes"

    if not changes:
        logger.info("Nothing to change.")
        return

    try:
        services.bills.update(bill.copy(**changes))
        logger.info(f"✓ Bill {bill.id} updated: {', '.join(sorted(changes))}")
    except Exception as e:
        logger.error(f"Error updating bill: {e}")
        sys.exit(1)


def cmd_pay(args, services):
    """Pay a bill: archive the payment and advance or close the bill."""
    bill = services.bills.find(args.bill_id)
    if not bill:
        logger.error(f"Bill with ID {args.bill_id} not found.")
        sys.exit(1)

    catalog = catalog_for(services)
    payment_date = parse_date_arg(args.date) if args.date else date.today()
    if payment_date is None:
        logger.error(f"Invalid payment date '{args.date}'.")
        sys.exit(1)

    amount_paid = None
    if args.amount is not None:
        amount_paid = parse_display_amount(args.amount)
    elif requires_amount_confirmation(bill, payment_date):
        # Late or variable bills ask for the amount actually paid
        logger.info(f"\n{bill.name}: {bill_status_text(bill, catalog, payment_date)}")
        if not bill.is_variable:
            logger.info(f"Base amount: {format_amount(bill.amount, catalog)}")
        entered = input("Amount actually paid: ").strip()
        if not entered:
            logger.info("Payment cancelled.")
            return
        amount_paid = parse_display_amount(entered)

    try:
        outcome = services.bills.pay(bill.id, amount_paid, payment_date)
    except Exception as e:
        logger.error(f"Error paying bill: {e}")
        sys.exit(1)

    archived = outcome.archived
    logger.info(
        f"\n✓ Paid {format_amount(archived.paid_amount, catalog)} for '{bill.name}'"
    )
    fee = archived.paid_amount - archived.amount
    if fee > 0:
        logger.info(f"  Fees: {format_amount(fee, catalog)}")
    if outcome.deletes_original:
        logger.info("  That was the last installment; the bill is closed.")
    else:
        logger.info(f"  Next due: {outcome.updated.due_date.strftime('%d/%m/%Y')}")


def cmd_delete(args, services):
    """Delete a bill by ID."""
    bill = services.bills.find(args.bill_id)
    if not bill:
        logger.error(f"Bill with ID {args.bill_id} not found.")
        sys.exit(1)

    if not args.yes:
        confirm = (
            input(f"\nDelete bill '{bill.name}'? (yes/no): ").strip().lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    if services.bills.delete(bill.id):
        logger.info(f"✓ Bill '{bill.name}' deleted successfully.")
    else:
        logger.error("Failed to delete bill.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup bills subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "bills",
        help="Add, list and pay bills",
        description="Manage bills and record payments",
    )

    bills_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available bill commands",
        dest="subcommand",
        required=True,
    )

    units = [unit.value for unit in RecurrenceUnit]

    # bills list
    list_parser = bills_subparsers.add_parser("list", help="List bills")
    list_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    list_parser.add_argument(
        "--history", action="store_true", help="Show paid records instead of pending bills"
    )
    list_parser.set_defaults(func=cmd_list)

    # bills add
    add_parser = bills_subparsers.add_parser("add", help="Add a bill")
    add_parser.add_argument("name", help="What the bill is for")
    add_parser.add_argument("amount", help="Amount, e.g. 1500.00 (0 for variable)")
    add_parser.add_argument("due_date", help="Due date (YYYY-MM-DD or dd/mm/YYYY)")
    add_parser.add_argument("-p", "--profile", type=int, default=1, help="Profile ID")
    add_parser.add_argument("--category", help="Category name (default: Other)")
    add_parser.add_argument("--unit", choices=units, default="month", help="Recurrence unit")
    add_parser.add_argument("--every", type=int, default=1, help="Recurrence interval")
    add_parser.add_argument(
        "--installments", type=int, default=0, help="Total installments (0 = unbounded)"
    )
    add_parser.add_argument("--current", type=int, default=1, help="Current installment")
    add_parser.add_argument(
        "--automatic", action="store_true", help="Auto-debited; no reminders"
    )
    add_parser.set_defaults(func=cmd_add)

    # bills edit
    edit_parser = bills_subparsers.add_parser("edit", help="Edit a bill")
    edit_parser.add_argument("bill_id", type=int, help="Bill ID")
    edit_parser.add_argument("--name")
    edit_parser.add_argument("--amount")
    edit_parser.add_argument("--due-date", dest="due_date")
    edit_parser.add_argument("--category")
    edit_parser.add_argument("--unit", choices=units)
    edit_parser.add_argument("--every", type=int)
    edit_parser.add_argument("--installments", type=int)
    edit_parser.add_argument("--automatic", choices=["yes", "no"])
    edit_parser.set_defaults(func=cmd_edit)

    # bills pay
    pay_parser = bills_subparsers.add_parser("pay", help="Pay a bill")
    pay_parser.add_argument("bill_id", type=int, help="Bill ID")
    pay_parser.add_argument("--amount", help="Amount actually paid")
    pay_parser.add_argument("--date", help="Payment date (default: today)")
    pay_parser.set_defaults(func=cmd_pay)

    # bills delete
    delete_parser = bills_subparsers.add_parser("delete", help="Delete a bill")
    delete_parser.add_argument("bill_id", type=int, help="Bill ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)
