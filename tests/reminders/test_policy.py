"""Tests for the reminder policy."""

from datetime import date, datetime, time, timedelta

import pytest

from models.category import Category
from reminders.policy import (
    ALERT_GLYPH,
    Insistence,
    SLEEPING_DELAY,
    category_glyph,
    eligible_bills,
    evaluate,
    in_curfew,
    should_fire,
)
from tests.helpers import make_bill

TARGET = time(8, 0)
TODAY = date(2024, 10, 10)

HOUSING = Category(id=1, profile_id=1, name="Housing", color_hex="#1976D2", icon="🏠")


def at(hour, minute=0):
    return datetime.combine(TODAY, time(hour, minute))


def run(now, bills, insistence=Insistence.STANDARD, catalog=None):
    return evaluate(now, TARGET, insistence, bills, [HOUSING], catalog)


class TestCurfew:
    """Tests for in_curfew."""

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [(7, 59, True), (8, 0, False), (21, 59, False), (22, 0, True), (23, 30, True)],
    )
    def test_boundaries(self, hour, minute, expected):
        """Test curfew runs before the target time and from 22:00."""
        assert in_curfew(at(hour, minute), TARGET) is expected


class TestEligibleBills:
    """Tests for eligible_bills."""

    def test_filters_and_orders(self):
        """Test only unpaid manual bills due today or earlier qualify, earliest first."""
        bills = [
            make_bill(id=1, name="Today", due_date=TODAY),
            make_bill(id=2, name="Overdue", due_date=TODAY - timedelta(days=3)),
            make_bill(id=3, name="Future", due_date=TODAY + timedelta(days=1)),
            make_bill(id=4, name="Auto", due_date=TODAY, is_automatic=True),
            make_bill(id=5, name="Paid", due_date=TODAY, is_paid=True),
            make_bill(id=6, name="Broken", due_date=None),
        ]

        names = [bill.name for bill in eligible_bills(bills, TODAY)]

        assert names == ["Overdue", "Today"]

    def test_ties_broken_by_id(self):
        """Test bills due the same day keep id order."""
        bills = [make_bill(id=9, name="B", due_date=TODAY), make_bill(id=3, name="A", due_date=TODAY)]

        assert [b.id for b in eligible_bills(bills, TODAY)] == [3, 9]


class TestShouldFire:
    """Tests for should_fire."""

    def test_standard_window(self):
        """Test standard insistence only fires within 45 minutes of the target time."""
        assert should_fire(Insistence.STANDARD, at(8, 0), TARGET)
        assert should_fire(Insistence.STANDARD, at(8, 44), TARGET)
        assert not should_fire(Insistence.STANDARD, at(8, 45), TARGET)
        assert not should_fire(Insistence.STANDARD, at(14, 0), TARGET)

    def test_high_and_critical_always_fire(self):
        """Test higher insistence fires on every run."""
        assert should_fire(Insistence.HIGH, at(14, 0), TARGET)
        assert should_fire(Insistence.CRITICAL, at(21, 0), TARGET)


class TestCategoryGlyph:
    """Tests for category_glyph."""

    def test_emoji_icon(self):
        assert category_glyph(HOUSING) == "🏠"

    def test_text_icon_uses_alert(self):
        """Test icon names that are not emoji fall back to the alert glyph."""
        category = Category(id=2, profile_id=1, name="X", color_hex="#000000", icon="label")

        assert category_glyph(category) == ALERT_GLYPH

    def test_missing_category(self):
        assert category_glyph(None) == ALERT_GLYPH


class TestEvaluate:
    """Tests for evaluate."""

    def test_curfew_sleeps(self, catalog):
        """Test a run before the target time sleeps for four hours."""
        decision = run(at(6), [make_bill(due_date=TODAY)], catalog=catalog)

        assert decision.notify is False
        assert decision.sleeping is True
        assert decision.next_delay == SLEEPING_DELAY

    def test_nothing_due_sleeps(self, catalog):
        """Test a run with no eligible bills sleeps."""
        decision = run(at(8, 10), [make_bill(due_date=TODAY + timedelta(days=2))], catalog=catalog)

        assert decision.notify is False
        assert decision.sleeping is True
        assert decision.next_delay == SLEEPING_DELAY

    def test_standard_notifies_in_window(self, catalog):
        """Test the first standard run after the target time notifies."""
        bills = [make_bill(id=1, category_id=1, due_date=TODAY)]

        decision = run(at(8, 10), bills, catalog=catalog)

        assert decision.notify is True
        assert decision.message == "🏠 Rent: Due today"
        assert decision.next_delay == timedelta(hours=1)
        assert decision.eligible_count == 1

    def test_standard_outside_window_stays_quiet(self, catalog):
        """Test later standard runs keep checking hourly without notifying."""
        decision = run(at(10), [make_bill(due_date=TODAY)], catalog=catalog)

        assert decision.notify is False
        assert decision.sleeping is False
        assert decision.next_delay == timedelta(hours=1)

    @pytest.mark.parametrize(
        "insistence,delay",
        [(Insistence.HIGH, timedelta(hours=4)), (Insistence.CRITICAL, timedelta(hours=2))],
    )
    def test_insistent_levels(self, catalog, insistence, delay):
        """Test high and critical notify every run with their own cadence."""
        decision = run(at(15), [make_bill(due_date=TODAY)], insistence, catalog)

        assert decision.notify is True
        assert decision.next_delay == delay

    def test_message_names_earliest_and_counts_others(self, catalog):
        """Test the message names the earliest bill and counts the rest."""
        bills = [
            make_bill(id=1, name="Water", due_date=TODAY),
            make_bill(id=2, name="Rent", category_id=1, due_date=TODAY - timedelta(days=3)),
            make_bill(id=3, name="Phone", due_date=TODAY - timedelta(days=1)),
        ]

        decision = run(at(8, 5), bills, catalog=catalog)

        assert decision.bill.name == "Rent"
        assert decision.message == "🏠 Rent: Overdue by 3 days (+2 more)"

    def test_automatic_bills_never_notify(self, catalog):
        """Test auto-debited bills are ignored."""
        decision = run(at(8, 5), [make_bill(due_date=TODAY, is_automatic=True)], catalog=catalog)

        assert decision.notify is False
        assert decision.sleeping is True
