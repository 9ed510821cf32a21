"""Preference service: user settings consumed by the reminder loop."""

from datetime import time
from typing import Optional

from dates import parse_time_of_day
from reminders.policy import Insistence

NOTIFY_TIME_KEY = "notify_time"
INSISTENCE_KEY = "insistence"

DEFAULT_NOTIFY_TIME = time(8, 0)
DEFAULT_INSISTENCE = Insistence.STANDARD


class PreferenceService:
    """Key/value store for user preferences."""

    def __init__(self, db_manager):
        """Initialize the preference service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a preference value, or ``default`` when unset."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else default

    def set(self, key: str, value: str) -> None:
        """Store a preference value, replacing any previous one."""
        with self.db_manager.connect() as conn:
            conn.execute(
                "INSERT INTO preferences (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()

    def get_notify_time(self) -> time:
        """Time of day reminders start; malformed values fall back to 08:00."""
        return parse_time_of_day(self.get(NOTIFY_TIME_KEY), DEFAULT_NOTIFY_TIME)

    def set_notify_time(self, value: str) -> time:
        """Set the reminder time.

        Args:
            value: Time as "HH:MM".

        Returns:
            The parsed time.

        Raises:
            ValueError: If the value is not a valid HH:MM time.
        """
        parsed = parse_time_of_day(value)
        if parsed is None:
            raise ValueError(f"Invalid time '{value}', expected HH:MM")
        self.set(NOTIFY_TIME_KEY, parsed.strftime("%H:%M"))
        return parsed

    def get_insistence(self) -> Insistence:
        """Insistence level; unknown stored values fall back to standard."""
        try:
            return Insistence.parse(self.get(INSISTENCE_KEY, DEFAULT_INSISTENCE.value))
        except ValueError:
            return DEFAULT_INSISTENCE

    def set_insistence(self, value) -> Insistence:
        """Set the insistence level.

        Args:
            value: "standard", "high" or "critical" (or Padrão/Alto/Crítico).

        Returns:
            The parsed level.

        Raises:
            ValueError: If the value is not a known level.
        """
        insistence = Insistence.parse(value)
        self.set(INSISTENCE_KEY, insistence.value)
        return insistence
