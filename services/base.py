"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database manager.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.expenses import ExpenseService
        from services.export_import import ExportImportService
        from services.maintenance import MaintenanceService
        from services.reports import ReportService

        self.categories = CategoryService(self.db_manager)
        self.expenses = ExpenseService(self.db_manager, self.categories)
        self.export_import = ExportImportService(self.expenses, self.categories)
        self.reports = ReportService(self.expenses)
        self.maintenance = MaintenanceService(
            self.db_manager, self.categories, self.expenses
        )
