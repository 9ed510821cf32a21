"""Tests for dashboard aggregation."""

from datetime import date

from dashboard import (
    DashboardMode,
    aggregate,
    grand_total,
    monthly_summary,
    percentages,
    sorted_buckets,
)
from models.category import Category
from tests.helpers import make_bill

CATEGORIES = [
    Category(id=1, profile_id=1, name="Housing", color_hex="#1976D2", icon="🏠"),
    Category(id=2, profile_id=1, name="Food", color_hex="#388E3C", icon="🍔"),
]


def paid(**overrides):
    fields = dict(is_paid=True, payment_date=date(2024, 10, 5), category_id=1)
    fields.update(overrides)
    fields.setdefault("paid_amount", fields.get("amount", 150000))
    return make_bill(**fields)


class TestAggregate:
    """Tests for aggregate."""

    def test_paid_mode_splits_fees(self):
        """Test fixed bills count their base and late fees go to their own bucket."""
        bills = [
            paid(amount=100000, paid_amount=105000),
            paid(amount=20000, paid_amount=20000, category_id=2),
        ]

        totals = aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PAID)

        assert totals == {"Housing": 100000, "Food": 20000, "Fees": 5000}

    def test_fees_at_epsilon_are_ignored(self):
        """Test a one-cent difference does not create a fees bucket."""
        bills = [paid(amount=10000, paid_amount=10001)]

        totals = aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PAID)

        assert "Fees" not in totals

    def test_variable_bill_counts_paid_amount(self):
        """Test a variable record adds what was paid to its category."""
        bills = [paid(amount=0, paid_amount=23456, category_id=2)]

        totals = aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PAID)

        assert totals == {"Food": 23456}

    def test_paid_mode_uses_payment_date(self):
        """Test a September bill paid in October counts in October."""
        bills = [paid(due_date=date(2024, 9, 28), payment_date=date(2024, 10, 2))]

        october = aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PAID)
        september = aggregate(bills, CATEGORIES, 9, 2024, DashboardMode.PAID)

        assert october == {"Housing": 150000}
        assert september == {}

    def test_pending_mode_uses_due_date_and_skips_paid(self):
        """Test pending mode sums unpaid bills due in the month."""
        bills = [
            make_bill(category_id=1, due_date=date(2024, 10, 10)),
            make_bill(category_id=1, due_date=date(2024, 11, 10)),
            paid(),
        ]

        totals = aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PENDING)

        assert totals == {"Housing": 150000}

    def test_unknown_category_goes_to_default(self):
        """Test a dangling category id is shown under the default name."""
        bills = [make_bill(category_id=99, due_date=date(2024, 10, 10))]

        totals = aggregate(
            bills, CATEGORIES, 10, 2024, "pending", default_category="Outros"
        )

        assert totals == {"Outros": 150000}

    def test_bill_without_due_date_is_skipped(self):
        """Test a malformed due date never breaks aggregation."""
        bills = [make_bill(due_date=None)]

        assert aggregate(bills, CATEGORIES, 10, 2024, DashboardMode.PENDING) == {}


class TestTotals:
    """Tests for grand_total, percentages and sorted_buckets."""

    def test_percentages(self):
        """Test shares sum to one hundred."""
        shares = percentages({"Housing": 7500, "Food": 2500})

        assert shares == {"Housing": 75.0, "Food": 25.0}
        assert grand_total({"Housing": 7500, "Food": 2500}) == 10000

    def test_percentages_zero_total(self):
        """Test an all-zero dashboard reports zero percent, not an error."""
        assert percentages({"Housing": 0}) == {"Housing": 0.0}
        assert percentages({}) == {}

    def test_sorted_buckets_largest_first(self):
        """Test legends list the biggest bucket first."""
        buckets = sorted_buckets({"Food": 100, "Housing": 300, "Fees": 100})

        assert buckets == [("Housing", 300), ("Fees", 100), ("Food", 100)]


class TestMonthlySummary:
    """Tests for monthly_summary."""

    def test_pending_includes_overdue(self):
        """Test the pending summary counts this month's bills and anything overdue."""
        today = date(2024, 10, 15)
        bills = [
            make_bill(amount=1000, due_date=date(2024, 10, 30)),
            make_bill(amount=2000, due_date=date(2024, 8, 1)),
            make_bill(amount=4000, due_date=date(2024, 11, 1)),
        ]

        summary = monthly_summary(bills, today)

        assert summary.total == 3000
        assert summary.fees == 0

    def test_history_sums_paid_and_fees(self):
        """Test the history summary counts this month's payments and their fees."""
        today = date(2024, 10, 15)
        bills = [
            paid(amount=10000, paid_amount=10300),
            paid(amount=5000, paid_amount=5000, payment_date=date(2024, 9, 30)),
        ]

        summary = monthly_summary(bills, today, history=True)

        assert summary.total == 10300
        assert summary.fees == 300
