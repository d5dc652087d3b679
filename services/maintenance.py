"""Database initialization and reset."""

import sqlite3
from datetime import date, timedelta
from decimal import Decimal

from errors import InternalError
from logger import get_logger
from models.category import DEFAULT_CATEGORY_NAMES, category_key
from models.expense import Expense
from models.results import OperationResult

logger = get_logger()

# (days ago, amount, preferred category, notes)
_SAMPLE_EXPENSES = (
    (1, Decimal("15.50"), None, "Lunch at cafe"),
    (2, Decimal("45.00"), "Transportation", "Gas fill-up"),
    (3, Decimal("12.99"), "Entertainment", "Movie ticket"),
)


class MaintenanceService:
    """Seeds a fresh ledger and wipes an existing one."""

    def __init__(self, db_manager, categories, expenses):
        self.db_manager = db_manager
        self.categories = categories
        self.expenses = expenses

    def initialize(self, seed_samples: bool = False) -> int:
        """Seed default categories and, optionally, a few sample expenses.

        Sample expenses are only added to a ledger without any expenses.

        Args:
            seed_samples: Whether to add the sample expenses.

        Returns:
            Number of sample expenses added.
        """
        self.categories.ensure_defaults_seeded()

        if not seed_samples or self.expenses.count() > 0:
            return 0

        categories = self.categories.find_all()
        if not categories:
            return 0

        # First category in creation order
        fallback_id = min(category.id for category in categories)
        today = date.today()
        added = 0
        for days_ago, amount, category_name, notes in _SAMPLE_EXPENSES:
            category = self.categories.find_by_name(category_name) if category_name else None
            expense = Expense(
                id=None,
                amount=amount,
                date=today - timedelta(days=days_ago),
                category_id=category.id if category else fallback_id,
                notes=notes,
            )
            if self.expenses.add(expense).success:
                added += 1

        logger.info(f"Added {added} sample expense(s)")
        return added

    def clear_all_data(self) -> OperationResult:
        """Delete all expenses and categories, then reseed the defaults.

        Everything happens in one database transaction, so a failure leaves
        the ledger as it was.
        """
        try:
            with self.db_manager.connect() as conn:
                with conn:
                    conn.execute("DELETE FROM expenses")
                    conn.execute("DELETE FROM categories")
                    conn.executemany(
                        "INSERT INTO categories (name, name_key) VALUES (?, ?)",
                        [
                            (name, category_key(name))
                            for name in DEFAULT_CATEGORY_NAMES
                        ],
                    )
        except sqlite3.Error as e:
            logger.error(f"Error clearing data: {e}")
            return OperationResult.failed(InternalError(f"Failed to reset data: {e}"))

        logger.info("Cleared all expenses and restored default categories")
        return OperationResult(True, "All data cleared")
