"""Decide, for one run of the reminder loop, whether to notify and when to run next.

Each run is independent: it looks at the clock, the user's preferences and
every stored bill, and produces a CheckDecision. It never raises because of a
bad record; bills with unreadable due dates simply never qualify.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from messages.loader import MessageCatalog
from models.bill import Bill
from models.category import Category
from recurrence import due_status

CURFEW_HOUR = 22
STANDARD_WINDOW = timedelta(minutes=45)
SLEEPING_DELAY = timedelta(hours=4)
ALERT_GLYPH = "🚨"


class Insistence(str, Enum):
    """How aggressively overdue bills are nagged about."""

    STANDARD = "standard"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value) -> "Insistence":
        """Parse a stored insistence, accepting the Portuguese labels.

        Raises:
            ValueError: If the value is not a known insistence level.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in _INSISTENCE_ALIASES:
            return _INSISTENCE_ALIASES[text]
        raise ValueError(f"Unknown insistence level: {value}")


_INSISTENCE_ALIASES = {
    "standard": Insistence.STANDARD,
    "padrão": Insistence.STANDARD,
    "padrao": Insistence.STANDARD,
    "high": Insistence.HIGH,
    "alto": Insistence.HIGH,
    "critical": Insistence.CRITICAL,
    "crítico": Insistence.CRITICAL,
    "critico": Insistence.CRITICAL,
}

_NEXT_DELAY = {
    Insistence.STANDARD: timedelta(hours=1),
    Insistence.HIGH: timedelta(hours=4),
    Insistence.CRITICAL: timedelta(hours=2),
}


@dataclass
class CheckDecision:
    """Outcome of one reminder check.

    Attributes:
        notify: Whether a notification should be shown now.
        message: Notification text when notify is True.
        bill: First eligible bill, if any.
        eligible_count: Number of bills pending notification.
        sleeping: True when the run was gated by curfew or had nothing to do.
        next_delay: How long until the next check.
    """

    notify: bool
    next_delay: timedelta
    sleeping: bool = False
    message: Optional[str] = None
    bill: Optional[Bill] = None
    eligible_count: int = 0


def in_curfew(now: datetime, target_time: time) -> bool:
    """True before the user's notification time or from 22:00 on."""
    return now.time() < target_time or now.hour >= CURFEW_HOUR


def next_check_delay(insistence: Insistence, sleeping: bool) -> timedelta:
    """Delay until the next check, from the insistence level and curfew state."""
    if sleeping:
        return SLEEPING_DELAY
    return _NEXT_DELAY.get(insistence, timedelta(hours=1))


def is_pending_notification(bill: Bill, today: date) -> bool:
    """A bill needs a reminder when it is unpaid, manual, and due today or earlier."""
    if bill.is_paid or bill.is_automatic:
        return False
    if bill.due_date is None:
        return False
    return bill.due_date <= today


def eligible_bills(bills: Iterable[Bill], today: date) -> List[Bill]:
    """Bills pending notification, earliest due date first."""
    pending = [bill for bill in bills if is_pending_notification(bill, today)]
    return sorted(pending, key=lambda bill: (bill.due_date, bill.id or 0))


def should_fire(insistence: Insistence, now: datetime, target_time: time) -> bool:
    """Whether a run outside curfew with eligible bills shows a notification.

    Standard insistence only fires in the first minutes after the target
    time; higher levels fire on every run.
    """
    if insistence == Insistence.STANDARD:
        window_start = datetime.combine(now.date(), target_time)
        return window_start <= now < window_start + STANDARD_WINDOW
    return insistence in (Insistence.HIGH, Insistence.CRITICAL)


def category_glyph(category: Optional[Category]) -> str:
    """The category's emoji, or the alert glyph when its icon is a text name."""
    if category is None or not category.icon:
        return ALERT_GLYPH
    icon = category.icon
    if len(icon) <= 2 or any(ord(char) > 0xFFFF for char in icon):
        return icon
    return ALERT_GLYPH


def build_message(
    bill: Bill,
    others: int,
    category: Optional[Category],
    catalog: MessageCatalog,
    today: date,
) -> str:
    """Notification text naming ``bill``, with a "+N more" suffix when needed."""
    status = due_status(bill, today)
    status_text = catalog.describe_status(status.state.value, status.days)
    template = (
        catalog.notification.multiple if others > 0 else catalog.notification.single
    )
    return template.format(
        glyph=category_glyph(category),
        name=bill.name,
        status=status_text,
        others=others,
    )


def evaluate(
    now: datetime,
    target_time: time,
    insistence: Insistence,
    bills: Iterable[Bill],
    categories: Iterable[Category],
    catalog: MessageCatalog,
) -> CheckDecision:
    """Run the notification policy once.

    Args:
        now: Current local time.
        target_time: User's preferred notification time of day.
        insistence: User's insistence level.
        bills: Bills from every profile.
        categories: Categories from every profile.
        catalog: Message catalog for the notification text.

    Returns:
        CheckDecision describing whether to notify and when to check again.
    """
    if in_curfew(now, target_time):
        return CheckDecision(
            notify=False,
            sleeping=True,
            next_delay=next_check_delay(insistence, sleeping=True),
        )

    today = now.date()
    pending = eligible_bills(bills, today)

    if not pending:
        return CheckDecision(
            notify=False,
            sleeping=True,
            next_delay=next_check_delay(insistence, sleeping=True),
        )

    first = pending[0]
    decision = CheckDecision(
        notify=False,
        bill=first,
        eligible_count=len(pending),
        next_delay=next_check_delay(insistence, sleeping=False),
    )

    if should_fire(insistence, now, target_time):
        category = next(
            (c for c in categories if c.id == first.category_id), None
        )
        decision.notify = True
        decision.message = build_message(
            first, len(pending) - 1, category, catalog, today
        )

    return decision
