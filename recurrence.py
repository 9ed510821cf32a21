"""Bill lifecycle: what happens to a bill when it is paid.

Paying a bill never flips a flag on the pending row. Instead an archived,
paid copy is emitted for the payment history, and the pending original is
either advanced to its next cycle or, when its installment series is
complete, deleted. The functions here are pure; BillService.pay applies the
outcome to the store.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from models.bill import Bill, RecurrenceUnit
from money import parse_minor_units
from logger import get_logger

logger = get_logger()


@dataclass
class PaymentOutcome:
    """Result of processing one payment.

    Attributes:
        archived: New paid record to insert (id is None).
        updated: The original advanced to its next cycle, or None when the
            original must be deleted because its series is complete.
    """

    archived: Bill
    updated: Optional[Bill]

    @property
    def deletes_original(self) -> bool:
        return self.updated is None


class DueState(str, Enum):
    PAID = "paid"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_TOMORROW = "due_tomorrow"
    UPCOMING = "upcoming"


@dataclass
class DueStatus:
    state: DueState
    days: int  # signed days until due; negative when overdue


def advance_date(start: date, unit: RecurrenceUnit, interval: int) -> date:
    """Move a due date forward by ``interval`` units.

    Month and year steps follow calendar arithmetic, so Jan 31 + 1 month is
    Feb 28 (or 29) rather than an overflow into March.

    Args:
        start: Date to advance from.
        unit: Recurrence unit. Anything unrecognised advances one month.
        interval: Number of units; values below 1 are treated as 1.

    Returns:
        The advanced date.
    """
    step = max(int(interval or 1), 1)

    if unit == RecurrenceUnit.DAY:
        return start + relativedelta(days=step)
    if unit == RecurrenceUnit.WEEK:
        return start + relativedelta(weeks=step)
    if unit == RecurrenceUnit.MONTH:
        return start + relativedelta(months=step)
    if unit == RecurrenceUnit.YEAR:
        return start + relativedelta(years=step)
    return start + relativedelta(months=1)


def process_payment(
    bill: Bill, amount_paid, payment_date: Optional[date] = None
) -> PaymentOutcome:
    """Compute the records produced by paying ``bill``.

    Args:
        bill: The pending bill being paid.
        amount_paid: Amount actually paid, in minor units or as a display string.
        payment_date: Date of payment; defaults to today. May be in the past
            for backdated payments.

    Returns:
        PaymentOutcome with the archived copy and the updated original (or
        None when the original is to be deleted).
    """
    paid = parse_minor_units(amount_paid)
    paid_on = payment_date or date.today()

    # A variable bill has no baseline; recording the paid amount as the base
    # keeps dashboards from reporting the whole payment as a fee.
    base_for_history = paid if bill.amount == 0 else bill.amount

    archived = bill.copy(
        id=None,
        due_date=bill.due_date or paid_on,
        is_paid=True,
        payment_date=paid_on,
        paid_amount=paid,
        amount=base_for_history,
    )

    if bill.is_last_installment:
        logger.debug(
            f"Bill '{bill.name}' finished its {bill.total_installments} installments"
        )
        return PaymentOutcome(archived=archived, updated=None)

    if bill.due_date is None:
        logger.warning(
            f"Bill '{bill.name}' has no valid due date; advancing from {paid_on}"
        )
    next_due = advance_date(
        bill.due_date or paid_on, bill.recurrence_unit, bill.recurrence_interval
    )

    updated = bill.copy(
        due_date=next_due,
        current_installment=bill.current_installment + 1,
        is_paid=False,
    )
    return PaymentOutcome(archived=archived, updated=updated)


def payment_fee(bill: Bill) -> int:
    """Late fee carried by a paid record: what was paid above its base amount."""
    if not bill.is_paid or bill.paid_amount is None:
        return 0
    return max(0, bill.paid_amount - bill.amount)


def days_remaining(due_date: Optional[date], today: Optional[date] = None) -> int:
    """Signed number of days until ``due_date``; negative when overdue.

    A missing or malformed due date counts as due today.
    """
    if due_date is None:
        return 0
    return (due_date - (today or date.today())).days


def due_status(bill: Bill, today: Optional[date] = None) -> DueStatus:
    """Classify a bill for display: paid, overdue, due today, tomorrow or later."""
    days = days_remaining(bill.due_date, today)

    if bill.is_paid:
        return DueStatus(DueState.PAID, days)
    if days < 0:
        return DueStatus(DueState.OVERDUE, days)
    if days == 0:
        return DueStatus(DueState.DUE_TODAY, days)
    if days == 1:
        return DueStatus(DueState.DUE_TOMORROW, days)
    return DueStatus(DueState.UPCOMING, days)


def requires_amount_confirmation(bill: Bill, today: Optional[date] = None) -> bool:
    """True when paying must ask for the actual amount instead of a one-tap pay.

    That is the case for overdue bills (a fee may have been charged) and for
    variable-amount bills (there is no amount to default to).
    """
    return days_remaining(bill.due_date, today) < 0 or bill.is_variable
