"""Configuration management for VenceHoje.

Reads configuration from ~/.config/vencehoje.toml (or the file named by
$VENCEHOJE_CONFIG) and creates default config if needed.
"""

import os
from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

CONFIG_ENV_VAR = "VENCEHOJE_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    backup_dir: Path
    notification_provider: str = "log"
    locale: str = "en"

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "vencehoje"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="vencehoje.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            backup_dir=base_dir / "backups",
            notification_provider="log",
            locale="en",
        )


def get_config_path() -> Path:
    """Get the path to the config file, honouring $VENCEHOJE_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "vencehoje.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return config_from_dict(data)


def config_from_dict(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Paths may start with ``~``. The log level is upper-cased so "debug"
    works too.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.

    Raises:
        ValueError: If the log level is not a standard logging level.
    """
    base_dir = _path(data.get("base_dir", Path.home() / "data" / "vencehoje"))

    db_config = data.get("database", {})
    log_config = data.get("logging", {})
    backup_config = data.get("backup", {})
    notifications_config = data.get("notifications", {})

    log_level = str(log_config.get("level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid logging level '{log_level}', expected one of {', '.join(LOG_LEVELS)}"
        )

    return Config(
        base_dir=base_dir,
        db_data_dir=_path(db_config.get("data_dir", base_dir / "db")),
        db_filename=db_config.get("filename", "vencehoje.db"),
        log_level=log_level,
        log_dir=_path(log_config.get("log_dir", base_dir / "logs")),
        backup_dir=_path(backup_config.get("backup_dir", base_dir / "backups")),
        notification_provider=notifications_config.get("provider", "log"),
        locale=notifications_config.get("locale", "en"),
    )


def _path(value) -> Path:
    return Path(value).expanduser()


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "backup": {
            "backup_dir": str(config.backup_dir),
        },
        "notifications": {
            "provider": config.notification_provider,
            "locale": config.locale,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
