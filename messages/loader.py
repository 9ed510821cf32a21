"""Loading of localized message catalogs from YAML files."""

import yaml
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import BaseModel
from logger import get_logger

logger = get_logger()

_MESSAGES_DIR = Path(__file__).parent


class CurrencyFormat(BaseModel):
    symbol: str
    decimal_separator: str
    thousands_separator: str


class StatusMessages(BaseModel):
    paid: str
    overdue: str
    due_today: str
    due_tomorrow: str
    upcoming: str
    variable_amount: str


class NotificationMessages(BaseModel):
    title: str
    single: str
    multiple: str
    test: str


class DashboardLabels(BaseModel):
    fees: str
    other: str
    paid: str
    pending: str


class BackupLabels(BaseModel):
    """Status and automatic-flag labels written to the CSV backup."""

    paid: str
    pending: str
    automatic: str
    manual: str


class MessageCatalog(BaseModel):
    """All user-facing strings for one locale."""

    locale: str
    currency: CurrencyFormat
    status: StatusMessages
    notification: NotificationMessages
    dashboard: DashboardLabels
    backup: BackupLabels

    def describe_status(self, state: str, days: int, paid_on: Optional[date] = None) -> str:
        """Render a due-status label, e.g. "Overdue by 3 days".

        Args:
            state: A DueState value ("overdue", "due_today", ...).
            days: Signed days until due.
            paid_on: Payment date, used for the "paid" state.
        """
        template = getattr(self.status, state)
        return template.format(
            days=abs(days),
            date=paid_on.strftime("%d/%m/%Y") if paid_on else "",
        )


_cache: Dict[str, MessageCatalog] = {}


def available_locales(messages_dir: Optional[Path] = None) -> List[str]:
    """List the locales that have a catalog file."""
    directory = messages_dir or _MESSAGES_DIR
    return sorted(path.stem for path in directory.glob("*.yaml"))


def load_catalog(locale: str = "en", messages_dir: Optional[Path] = None) -> MessageCatalog:
    """Load and validate the catalog for ``locale``.

    Args:
        locale: Catalog name, e.g. "en" or "pt_BR".
        messages_dir: Directory with catalog files. Defaults to this package.

    Returns:
        The validated MessageCatalog.

    Raises:
        FileNotFoundError: If no catalog exists for the locale.
        yaml.YAMLError: If the YAML is invalid.
        pydantic.ValidationError: If the catalog is missing keys.
    """
    directory = messages_dir or _MESSAGES_DIR
    cache_key = f"{directory}:{locale}"
    if cache_key in _cache:
        return _cache[cache_key]

    catalog_file = directory / f"{locale}.yaml"
    if not catalog_file.exists():
        raise FileNotFoundError(f"Message catalog not found: {catalog_file}")

    logger.debug(f"Loading message catalog from {catalog_file}")

    with open(catalog_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    catalog = MessageCatalog.model_validate(data)
    _cache[cache_key] = catalog
    return catalog
