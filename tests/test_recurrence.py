"""Tests for the bill lifecycle rules."""

from datetime import date

import pytest

from models.bill import RecurrenceUnit
from recurrence import (
    DueState,
    advance_date,
    days_remaining,
    due_status,
    payment_fee,
    process_payment,
    requires_amount_confirmation,
)
from tests.helpers import make_bill


class TestAdvanceDate:
    """Tests for advance_date."""

    @pytest.mark.parametrize(
        "unit,interval,expected",
        [
            (RecurrenceUnit.DAY, 10, date(2024, 10, 11)),
            (RecurrenceUnit.WEEK, 1, date(2024, 10, 8)),
            (RecurrenceUnit.MONTH, 1, date(2024, 11, 1)),
            (RecurrenceUnit.MONTH, 3, date(2025, 1, 1)),
            (RecurrenceUnit.YEAR, 1, date(2025, 10, 1)),
        ],
    )
    def test_units(self, unit, interval, expected):
        """Test each unit advances by calendar arithmetic."""
        assert advance_date(date(2024, 10, 1), unit, interval) == expected

    def test_month_end_clamps(self):
        """Test Jan 31 plus one month lands on the last day of February."""
        assert advance_date(date(2024, 1, 31), RecurrenceUnit.MONTH, 1) == date(2024, 2, 29)
        assert advance_date(date(2023, 1, 31), RecurrenceUnit.MONTH, 1) == date(2023, 2, 28)

    def test_interval_below_one_treated_as_one(self):
        """Test a zero interval still moves the date forward."""
        assert advance_date(date(2024, 10, 1), RecurrenceUnit.DAY, 0) == date(2024, 10, 2)


class TestProcessPayment:
    """Tests for process_payment."""

    def test_monthly_bill_advances(self):
        """Test paying an unbounded monthly bill advances it one month."""
        bill = make_bill(id=7)

        outcome = process_payment(bill, 150000, date(2024, 10, 1))

        assert outcome.deletes_original is False
        assert outcome.updated.id == 7
        assert outcome.updated.due_date == date(2024, 11, 1)
        assert outcome.updated.current_installment == 2
        assert outcome.updated.is_paid is False

    def test_archived_copy(self):
        """Test the archived copy is a new paid record with the payment details."""
        bill = make_bill(id=7)

        archived = process_payment(bill, 160000, date(2024, 10, 4)).archived

        assert archived.id is None
        assert archived.is_paid is True
        assert archived.paid_amount == 160000
        assert archived.amount == 150000
        assert archived.payment_date == date(2024, 10, 4)
        assert archived.due_date == date(2024, 10, 1)
        assert archived.current_installment == 1

    def test_last_installment_deletes_original(self):
        """Test the final installment produces no updated bill."""
        bill = make_bill(id=7, total_installments=3, current_installment=3)

        outcome = process_payment(bill, 150000, date(2024, 10, 1))

        assert outcome.deletes_original is True
        assert outcome.updated is None
        assert outcome.archived.is_paid is True

    @pytest.mark.parametrize("current", [1, 2, 3, 4])
    def test_installment_before_last_keeps_original(self, current):
        """Test any installment before the last advances the original bill."""
        bill = make_bill(id=7, total_installments=5, current_installment=current)

        outcome = process_payment(bill, 150000, date(2024, 10, 1))

        assert outcome.deletes_original is False
        assert outcome.updated.id == 7
        assert outcome.updated.current_installment == current + 1
        assert outcome.updated.due_date == date(2024, 11, 1)

    def test_variable_bill_base_is_paid_amount(self):
        """Test a variable bill records what was paid as its archived base."""
        bill = make_bill(amount=0)

        outcome = process_payment(bill, 8765, date(2024, 10, 1))

        assert outcome.archived.amount == 8765
        assert outcome.updated.amount == 0

    def test_amount_as_display_string(self):
        """Test amounts arriving as strings keep only their digits."""
        outcome = process_payment(make_bill(), "R$ 1.500,00", date(2024, 10, 1))

        assert outcome.archived.paid_amount == 150000

    def test_missing_due_date_advances_from_payment_date(self):
        """Test a bill with no due date advances from the day it was paid."""
        bill = make_bill(due_date=None, recurrence_unit=RecurrenceUnit.WEEK)

        outcome = process_payment(bill, 100, date(2024, 10, 10))

        assert outcome.updated.due_date == date(2024, 10, 17)
        assert outcome.archived.due_date == date(2024, 10, 10)

    def test_payment_date_defaults_to_today(self):
        """Test omitting the payment date uses today."""
        outcome = process_payment(make_bill(), 150000)

        assert outcome.archived.payment_date == date.today()


class TestDueStatus:
    """Tests for due status helpers."""

    def test_days_remaining(self):
        """Test signed day counts and the None case."""
        today = date(2024, 10, 10)

        assert days_remaining(date(2024, 10, 15), today) == 5
        assert days_remaining(date(2024, 10, 7), today) == -3
        assert days_remaining(None, today) == 0

    @pytest.mark.parametrize(
        "due,state",
        [
            (date(2024, 10, 7), DueState.OVERDUE),
            (date(2024, 10, 10), DueState.DUE_TODAY),
            (date(2024, 10, 11), DueState.DUE_TOMORROW),
            (date(2024, 10, 20), DueState.UPCOMING),
        ],
    )
    def test_states(self, due, state):
        """Test each pending state."""
        assert due_status(make_bill(due_date=due), date(2024, 10, 10)).state == state

    def test_paid_state_wins(self):
        """Test archived records are paid regardless of due date."""
        bill = make_bill(due_date=date(2024, 1, 1), is_paid=True)

        assert due_status(bill, date(2024, 10, 10)).state == DueState.PAID

    def test_payment_fee(self):
        """Test the fee is what was paid above the base, never negative."""
        assert payment_fee(make_bill(is_paid=True, amount=10000, paid_amount=10500)) == 500
        assert payment_fee(make_bill(is_paid=True, amount=10000, paid_amount=9000)) == 0
        assert payment_fee(make_bill(amount=10000, paid_amount=10500)) == 0

    def test_requires_amount_confirmation(self):
        """Test overdue and variable bills ask for the amount paid."""
        today = date(2024, 10, 10)

        assert requires_amount_confirmation(make_bill(due_date=date(2024, 10, 9)), today)
        assert requires_amount_confirmation(make_bill(amount=0, due_date=today), today)
        assert not requires_amount_confirmation(make_bill(due_date=today), today)
