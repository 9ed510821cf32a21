"""Dashboard aggregation: per-category totals of paid or pending bills.

Totals are integers in minor units. Paid-mode totals split any amount paid
above a bill's base into a separate fees bucket.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional

from models.bill import Bill
from models.category import Category
from recurrence import payment_fee

# Fee totals at or below this many minor units are treated as rounding noise.
FEES_EPSILON = 1


class DashboardMode(str, Enum):
    PAID = "paid"
    PENDING = "pending"


@dataclass
class MonthlySummary:
    total: int
    fees: int = 0


def _relevant_date(bill: Bill, mode: DashboardMode) -> Optional[date]:
    if mode == DashboardMode.PAID:
        return bill.payment_date or bill.due_date
    return bill.due_date


def _in_month(value: Optional[date], month: int, year: int) -> bool:
    return value is not None and value.month == month and value.year == year


def aggregate(
    bills: Iterable[Bill],
    categories: Iterable[Category],
    month: int,
    year: int,
    mode: DashboardMode,
    fees_label: str = "Fees",
    default_category: str = "Other",
) -> Dict[str, int]:
    """Sum bills per category for one month.

    Args:
        bills: Bills of the profile being shown.
        categories: Categories used to resolve names.
        month: Month number (1-12).
        year: Four-digit year.
        mode: PAID sums archived payments by payment date; PENDING sums
            unpaid bills by due date.
        fees_label: Name of the fees bucket.
        default_category: Name used for bills whose category is missing.

    Returns:
        Mapping of category name to total in minor units. The fees bucket is
        present only when its total exceeds FEES_EPSILON.
    """
    mode = DashboardMode(mode)
    names = {category.id: category.name for category in categories}
    want_paid = mode == DashboardMode.PAID

    totals: Dict[str, int] = {}
    fees = 0

    for bill in bills:
        if bill.is_paid != want_paid:
            continue
        if not _in_month(_relevant_date(bill, mode), month, year):
            continue

        name = names.get(bill.category_id, default_category)

        if want_paid:
            paid = bill.paid_amount if bill.paid_amount is not None else bill.amount
            if bill.is_variable:
                totals[name] = totals.get(name, 0) + paid
            else:
                totals[name] = totals.get(name, 0) + bill.amount
                fees += payment_fee(bill)
        else:
            totals[name] = totals.get(name, 0) + bill.amount

    if fees > FEES_EPSILON:
        totals[fees_label] = totals.get(fees_label, 0) + fees

    return totals


def grand_total(totals: Dict[str, int]) -> int:
    """Sum of every bucket, fees included."""
    return sum(totals.values())


def percentages(totals: Dict[str, int]) -> Dict[str, float]:
    """Share of the grand total per bucket, in percent (0 when the total is 0)."""
    overall = grand_total(totals)
    if overall == 0:
        return {name: 0.0 for name in totals}
    return {name: value * 100.0 / overall for name, value in totals.items()}


def sorted_buckets(totals: Dict[str, int]) -> List[tuple]:
    """Buckets ordered largest first, for legends."""
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def monthly_summary(
    bills: Iterable[Bill], today: Optional[date] = None, history: bool = False
) -> MonthlySummary:
    """Totals shown on the bill list header for the current month.

    History mode sums what was paid this month and the fees within it.
    Pending mode sums unpaid bills due this month plus anything overdue.
    """
    today = today or date.today()
    summary = MonthlySummary(total=0)

    for bill in bills:
        if history:
            if not bill.is_paid:
                continue
            if not _in_month(bill.payment_date, today.month, today.year):
                continue
            paid = bill.paid_amount if bill.paid_amount is not None else bill.amount
            summary.total += paid
            summary.fees += payment_fee(bill)
        else:
            if bill.is_paid or bill.due_date is None:
                continue
            due_this_month = _in_month(bill.due_date, today.month, today.year)
            if due_this_month or bill.due_date < today:
                summary.total += bill.amount

    return summary
