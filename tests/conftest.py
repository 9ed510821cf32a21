"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest

from config import Config, get_migrations_dir
from messages.loader import load_catalog
from services.base import Services
from tests.helpers import InMemoryDatabaseManager, run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration rooted in a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    base_dir = tmp_path / "vencehoje"
    return Config(
        base_dir=base_dir,
        db_data_dir=base_dir / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=base_dir / "logs",
        backup_dir=base_dir / "backups",
        notification_provider="log",
        locale="en",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Database manager over the in-memory database with every migration applied.

    The schema includes the main profile (id 1), its built-in categories and
    the default reminder preferences.
    """
    run_migrations(test_db, get_migrations_dir())
    return InMemoryDatabaseManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Services container backed by the in-memory database."""
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def catalog():
    """English message catalog."""
    return load_catalog("en")
