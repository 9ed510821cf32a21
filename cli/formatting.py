"""Display helpers shared by the CLI commands."""

from datetime import date
from typing import Optional

from dates import parse_backup_date, parse_date
from messages.loader import MessageCatalog, load_catalog
from models.bill import Bill
from money import format_minor_units
from recurrence import DueState, due_status


def catalog_for(services) -> MessageCatalog:
    """Message catalog for the configured locale."""
    return load_catalog(getattr(services.config, "locale", "en"))


def format_amount(amount: int, catalog: MessageCatalog) -> str:
    currency = catalog.currency
    return format_minor_units(
        amount,
        symbol=currency.symbol,
        decimal_separator=currency.decimal_separator,
        thousands_separator=currency.thousands_separator,
    )


def parse_date_arg(value: Optional[str]) -> Optional[date]:
    """Parse a date typed as YYYY-MM-DD or dd/mm/YYYY."""
    if value is None:
        return None
    return parse_date(value) or parse_backup_date(value)


def bill_amount_text(bill: Bill, catalog: MessageCatalog) -> str:
    if bill.is_paid and bill.paid_amount is not None:
        return format_amount(bill.paid_amount, catalog)
    if bill.is_variable:
        return catalog.status.variable_amount
    return format_amount(bill.amount, catalog)


def bill_status_text(bill: Bill, catalog: MessageCatalog, today: Optional[date] = None) -> str:
    status = due_status(bill, today)
    if status.state == DueState.UPCOMING and bill.due_date:
        return bill.due_date.strftime("%d/%m/%Y")
    return catalog.describe_status(status.state.value, status.days, bill.payment_date)


def installment_text(bill: Bill) -> str:
    if bill.total_installments > 0:
        return f"{bill.current_installment}/{bill.total_installments}"
    return ""
