"""Backup service: CSV export and restore of a profile's bills."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from backup.csv_backup import read_bills, write_bills
from messages.loader import MessageCatalog, available_locales, load_catalog
from logger import get_logger

logger = get_logger()


class BackupService:
    """Service for backing up and restoring bills."""

    def __init__(self, config, bills, categories):
        """Initialize the backup service.

        Args:
            config: Application configuration (backup directory and locale).
            bills: BillService.
            categories: CategoryService.
        """
        self.config = config
        self.bills = bills
        self.categories = categories

    def _catalog(self) -> MessageCatalog:
        return load_catalog(getattr(self.config, "locale", "en"))

    def _all_catalogs(self) -> List[MessageCatalog]:
        return [load_catalog(locale) for locale in available_locales()]

    def default_backup_path(self, profile_id: int) -> Path:
        """Timestamped file name in the configured backup directory."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return self.config.backup_dir / f"vencehoje-profile{profile_id}-{timestamp}.csv"

    def export_profile(self, profile_id: int, path: Optional[Path] = None) -> Path:
        """Write every bill of a profile (pending and paid) to a CSV file.

        Args:
            profile_id: Profile to export.
            path: Destination file; defaults to a timestamped file in the
                backup directory.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        destination = Path(path) if path else self.default_backup_path(profile_id)
        destination.parent.mkdir(parents=True, exist_ok=True)

        bills = self.bills.find_by_profile(profile_id)
        categories = self.categories.find_by_profile(profile_id)

        with open(destination, "w", encoding="utf-8", newline="") as f:
            count = write_bills(bills, categories, f, self._catalog())

        logger.info(f"Exported {count} bill(s) of profile {profile_id} to {destination}")
        return destination

    def import_profile(self, profile_id: int, path: Path) -> int:
        """Replace a profile's bills with those in a CSV backup.

        The whole file is read before anything is touched; existing bills
        are only cleared once at least one row was read, and the clear and
        the inserts happen in one transaction.

        Args:
            profile_id: Profile to restore into.
            path: Backup file to read.

        Returns:
            Number of bills imported.

        Raises:
            OSError: If the file cannot be read.
        """
        fallback = self.categories.find_fallback(profile_id)
        fallback_id = fallback.id if fallback else None
        by_name = {
            category.name: category.id
            for category in self.categories.find_by_profile(profile_id)
        }

        def resolve_category(name: str) -> Optional[int]:
            return by_name.get(name, fallback_id)

        with open(path, "r", encoding="utf-8", newline="") as f:
            bills = read_bills(f, profile_id, resolve_category, self._all_catalogs())

        if not bills:
            logger.warning(f"No bills found in {path}; existing data left untouched")
            return 0

        count = self.bills.replace_profile_bills(profile_id, bills)
        logger.info(f"Imported {count} bill(s) into profile {profile_id} from {path}")
        return count
