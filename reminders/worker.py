"""The reminder loop: one check per run, always followed by one scheduled run."""

from datetime import datetime
from typing import Callable, Optional

from messages.loader import MessageCatalog
from notifiers.base import NotificationProvider
from reminders.policy import CheckDecision, SLEEPING_DELAY, evaluate
from reminders.scheduler import CheckScheduler
from logger import get_logger

logger = get_logger()


class ReminderWorker:
    """Runs the notification policy against the store and fires reminders.

    Args:
        services: Services container (bills, categories, preferences).
        notifier: Provider used to show notifications.
        catalog: Message catalog for notification text.
        scheduler: Where the next check is scheduled. When None, runs are
            one-shot (``notify check`` in the CLI).
        clock: Returns the current local time.
    """

    def __init__(
        self,
        services,
        notifier: NotificationProvider,
        catalog: MessageCatalog,
        scheduler: Optional[CheckScheduler] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.services = services
        self.notifier = notifier
        self.catalog = catalog
        self.scheduler = scheduler
        self.clock = clock

    def run_check(self) -> CheckDecision:
        """Check for due bills, notify if the policy says so, and reschedule.

        Returns:
            The decision taken for this run.
        """
        now = self.clock()

        try:
            decision = evaluate(
                now=now,
                target_time=self.services.preferences.get_notify_time(),
                insistence=self.services.preferences.get_insistence(),
                bills=self.services.bills.find_all(),
                categories=self.services.categories.find_all(),
                catalog=self.catalog,
            )
            logger.debug(
                f"Reminder check: {decision.eligible_count} bill(s) pending, "
                f"notify={decision.notify}, sleeping={decision.sleeping}"
            )
            if decision.notify:
                self.notifier.send(self.catalog.notification.title, decision.message)
        except Exception as e:
            logger.error(f"Reminder check failed: {e}")
            decision = CheckDecision(
                notify=False, sleeping=True, next_delay=SLEEPING_DELAY
            )

        if self.scheduler is not None:
            self.scheduler.schedule_next(self.run_check, decision.next_delay, now)

        return decision

    def send_test(self) -> None:
        """Show a test notification so the user knows reminders work."""
        self.notifier.send(
            self.catalog.notification.title, self.catalog.notification.test
        )
