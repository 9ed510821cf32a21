"""Defensive date parsing shared by the store, the CSV backup and the core logic.

A single malformed date must never abort a payment, an aggregation or a
reminder check, so every parser here returns ``None`` instead of raising.
"""

import logging
from datetime import date, datetime, time
from typing import Optional

logger = logging.getLogger(__name__)

BACKUP_DATE_FORMAT = "%d/%m/%Y"


def parse_date(value, fmt: Optional[str] = None) -> Optional[date]:
    """Parse a stored or user-supplied date.

    Args:
        value: A ``date``, an ISO-8601 string, or None.
        fmt: Optional ``strptime`` format. ISO-8601 is used when omitted.

    Returns:
        The parsed date, or None if the value is missing or malformed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        if fmt:
            return datetime.strptime(text, fmt).date()
        return date.fromisoformat(text)
    except ValueError:
        logger.debug(f"Ignoring malformed date: {text!r}")
        return None


def parse_backup_date(value) -> Optional[date]:
    """Parse a date written in the CSV backup format (dd/mm/YYYY)."""
    return parse_date(value, BACKUP_DATE_FORMAT)


def format_backup_date(value: Optional[date]) -> str:
    """Format a date for the CSV backup, empty string for None."""
    return value.strftime(BACKUP_DATE_FORMAT) if value else ""


def parse_time_of_day(value, default: Optional[time] = None) -> Optional[time]:
    """Parse an ``HH:MM`` string, falling back to ``default`` when malformed."""
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except (TypeError, ValueError):
        return default
