"""Helper utilities for tests."""

from contextlib import contextmanager
from datetime import date
from pathlib import Path
import sqlite3

from config import get_migrations_dir
from models.bill import Bill


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        # Seed categories carry emoji icons
        conn.executescript(migration_file.read_text(encoding="utf-8"))

    conn.commit()


class InMemoryDatabaseManager:
    """DatabaseManager stand-in sharing one in-memory connection.

    ``connect()`` hands out the same connection every time and never closes
    it, so data written by one service call is visible to the next.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @contextmanager
    def connect(self):
        yield self.conn

    def get_db_path(self):
        return Path(":memory:")

    def get_migrations_dir(self):
        return get_migrations_dir()


def make_bill(**overrides) -> Bill:
    """Build a pending monthly bill for profile 1, overriding any field."""
    fields = dict(
        id=None,
        profile_id=1,
        name="Rent",
        amount=150000,
        due_date=date(2024, 10, 1),
    )
    fields.update(overrides)
    return Bill(**fields)
