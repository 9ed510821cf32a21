"""Bill model: a single payable obligation, recurring or one-off."""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional


class RecurrenceUnit(str, Enum):
    """Calendar unit a bill's due date advances by after each payment."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value) -> "RecurrenceUnit":
        """Parse a unit name, accepting the Portuguese labels too.

        Unknown values fall back to MONTH.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        return _UNIT_ALIASES.get(text, cls.MONTH)


_UNIT_ALIASES = {
    "day": RecurrenceUnit.DAY,
    "dia": RecurrenceUnit.DAY,
    "week": RecurrenceUnit.WEEK,
    "semana": RecurrenceUnit.WEEK,
    "month": RecurrenceUnit.MONTH,
    "mês": RecurrenceUnit.MONTH,
    "mes": RecurrenceUnit.MONTH,
    "year": RecurrenceUnit.YEAR,
    "ano": RecurrenceUnit.YEAR,
}


@dataclass
class Bill:
    """A bill belonging to one profile.

    Attributes:
        id: Row id, None until stored.
        profile_id: Owning profile.
        name: What the bill is for (e.g. "Rent").
        amount: Base amount in minor currency units. 0 means variable amount.
        due_date: Next due date. None when the stored value was malformed.
        category_id: Category row id, may point at a deleted category.
        paid_amount: Amount actually paid, set on archived (paid) records.
        payment_date: When it was paid, set on archived records.
        recurrence_unit: Unit the due date advances by.
        recurrence_interval: How many units per cycle (>= 1).
        total_installments: Number of installments, 0 for unbounded.
        current_installment: Installment the bill is currently on (>= 1).
        is_paid: True for archived payment records.
        is_automatic: Auto-debited; never triggers a reminder.
    """

    id: Optional[int]
    profile_id: int
    name: str
    amount: int
    due_date: Optional[date]
    category_id: Optional[int] = None
    paid_amount: Optional[int] = None
    payment_date: Optional[date] = None
    recurrence_unit: RecurrenceUnit = RecurrenceUnit.MONTH
    recurrence_interval: int = 1
    total_installments: int = 0
    current_installment: int = 1
    is_paid: bool = False
    is_automatic: bool = False

    @property
    def is_variable(self) -> bool:
        """True when the amount is only known at payment time."""
        return self.amount == 0

    @property
    def is_last_installment(self) -> bool:
        """True when paying this bill completes its installment series."""
        return (
            self.total_installments > 0
            and self.current_installment >= self.total_installments
        )

    def copy(self, **changes) -> "Bill":
        """Return a copy of this bill with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert bill to dictionary for database storage."""
        return {
            "id": self.id,
            "profile_id": self.profile_id,
            "category_id": self.category_id,
            "name": self.name,
            "amount": self.amount,
            "paid_amount": self.paid_amount,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "payment_date": (
                self.payment_date.isoformat() if self.payment_date else None
            ),
            "recurrence_unit": self.recurrence_unit.value,
            "recurrence_interval": self.recurrence_interval,
            "total_installments": self.total_installments,
            "current_installment": self.current_installment,
            "is_paid": int(self.is_paid),
            "is_automatic": int(self.is_automatic),
        }
