"""Factory for creating notification provider instances."""

from config import Config
from notifiers.base import NotificationProvider
from notifiers.log import LogNotificationProvider
from logger import get_logger

logger = get_logger()


def get_notification_provider(config: Config) -> NotificationProvider:
    """Create a notification provider based on configuration.

    Args:
        config: Application configuration.

    Returns:
        NotificationProvider instance.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    provider_name = getattr(config, "notification_provider", None) or "log"

    if provider_name == "log":
        logger.debug("Using log notification provider")
        return LogNotificationProvider()

    raise ValueError(f"Unknown notification provider: {provider_name}")
