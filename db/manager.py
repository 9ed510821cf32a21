"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


class DatabaseManager:
    """Manages connections to the VenceHoje SQLite database.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Open a connection to the bills database, closing it on exit.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self):
        """Return the path of the bills database file."""
        return self.config.db_path

    def get_migrations_dir(self):
        """Return the directory holding the SQL migrations."""
        return get_migrations_dir()


@contextmanager
def atomic(db_manager):
    """Run several statements as one unit of work.

    Commits when the block exits normally and rolls back if it raises, so a
    payment or a CSV restore never leaves half-written rows behind.

    Args:
        db_manager: Any object exposing ``connect()`` as a context manager.

    Yields:
        sqlite3.Connection: Connection with an open transaction.
    """
    with db_manager.connect() as conn:
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
