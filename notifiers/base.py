"""Base provider interface for notification delivery."""

from abc import ABC, abstractmethod


class NotificationProvider(ABC):
    """Abstract base class for notification providers.

    A provider shows one user-visible notification. Sending a new
    notification replaces the previous one rather than stacking.
    """

    @abstractmethod
    def send(self, title: str, message: str) -> None:
        """Show a notification.

        Args:
            title: Short title, e.g. "VenceHoje 🚨".
            message: Body naming the bill that is due.

        Raises:
            Exception: If the notification could not be delivered.
        """
        pass
