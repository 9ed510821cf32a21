"""Localized labels for notifications, due statuses, dashboards and backups."""

from messages.loader import MessageCatalog, load_catalog, available_locales

__all__ = ["MessageCatalog", "load_catalog", "available_locales"]
