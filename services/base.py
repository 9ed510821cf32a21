"""Services container wiring the store together."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for the bill, category, profile, preference and backup services.

    The CLI builds one per invocation; tests pass an in-memory database
    manager instead of a file-backed one.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager. If None, one is created from config.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.bills import BillService
        from services.categories import CategoryService
        from services.profiles import ProfileService
        from services.preferences import PreferenceService
        from services.backups import BackupService

        self.bills = BillService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.profiles = ProfileService(self.db_manager, self.categories)
        self.preferences = PreferenceService(self.db_manager)
        self.backups = BackupService(config, self.bills, self.categories)
