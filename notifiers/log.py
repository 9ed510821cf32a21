"""Notification provider that writes reminders to the application log."""

from typing import Optional
from notifiers.base import NotificationProvider
from logger import get_logger

logger = get_logger()


class LogNotificationProvider(NotificationProvider):
    """Shows notifications as WARNING log records (console and log file)."""

    def __init__(self):
        self.last_message: Optional[str] = None

    def send(self, title: str, message: str) -> None:
        self.last_message = message
        logger.warning(f"{title} {message}")
