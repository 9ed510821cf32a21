"""Delivery of user-visible bill reminders."""

from notifiers.factory import get_notification_provider

__all__ = ["get_notification_provider"]
