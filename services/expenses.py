"""Expense service for database operations."""

import sqlite3
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from errors import InternalError, LedgerError, NotFoundError, ValidationError
from logger import get_logger
from models.category_summary import CategorySummary
from models.expense import Expense
from models.results import OperationResult
from validation import validate_expense

logger = get_logger()

# SQL Query Constants
_EXPENSE_SELECT = """
    SELECT e.id, e.amount, e.expense_date, e.category_id, e.notes, c.name
    FROM expenses e
    LEFT JOIN categories c ON c.id = e.category_id
"""

# Newest first; id breaks ties so pages are stable
_EXPENSE_ORDER = " ORDER BY e.expense_date DESC, e.id DESC"


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db_manager, categories):
        """Initialize the expense service.

        Args:
            db_manager: Database manager instance for database operations.
            categories: CategoryService used to check category references.
        """
        self.db_manager = db_manager
        self.categories = categories

    def _validate(self, expense: Expense) -> Expense:
        outcome = validate_expense(expense, self.categories.exists)
        if not outcome.ok:
            raise ValidationError(outcome.message)
        return outcome.expense

    def add(self, expense: Expense) -> OperationResult:
        """Validate and insert a new expense.

        Notes longer than the limit are truncated rather than rejected. On
        success the expense's id is populated and the stored version is
        returned as the result entity.

        Args:
            expense: Expense to add. Its id is ignored.

        Returns:
            OperationResult describing the outcome.
        """
        try:
            valid = self._validate(expense)

            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO expenses (amount, expense_date, category_id, notes)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        str(valid.amount),
                        valid.date.isoformat(),
                        valid.category_id,
                        valid.notes,
                    ),
                )
                conn.commit()
                valid.id = cursor.lastrowid
        except LedgerError as e:
            logger.warning(f"Expense not added: {e.message}")
            return OperationResult.failed(e)
        except sqlite3.Error as e:
            logger.error(f"Error adding expense: {e}")
            return OperationResult.failed(InternalError(f"Error adding expense: {e}"))

        expense.id = valid.id
        logger.debug(f"Added expense {valid.id}: {valid.amount} on {valid.date}")
        return OperationResult(True, "Expense added successfully", valid)

    def update(self, expense: Expense) -> OperationResult:
        """Replace every mutable field of an existing expense.

        Args:
            expense: Expense carrying the id to update and the new values.

        Returns:
            OperationResult describing the outcome.
        """
        try:
            if expense.id is None or self.find(expense.id) is None:
                raise NotFoundError("Expense not found")

            valid = self._validate(expense)

            with self.db_manager.connect() as conn:
                conn.execute(
                    """
                    UPDATE expenses
                    SET amount = ?, expense_date = ?, category_id = ?, notes = ?
                    WHERE id = ?
                    """,
                    (
                        str(valid.amount),
                        valid.date.isoformat(),
                        valid.category_id,
                        valid.notes,
                        valid.id,
                    ),
                )
                conn.commit()
        except LedgerError as e:
            logger.warning(f"Expense {expense.id} not updated: {e.message}")
            return OperationResult.failed(e)
        except sqlite3.Error as e:
            logger.error(f"Error updating expense {expense.id}: {e}")
            return OperationResult.failed(InternalError(f"Error updating expense: {e}"))

        logger.info(f"Updated expense {valid.id}")
        return OperationResult(True, "Expense updated successfully", valid)

    def delete(self, expense_id: int) -> OperationResult:
        """Delete an expense by ID.

        Args:
            expense_id: The expense ID to delete.

        Returns:
            OperationResult describing the outcome.
        """
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
                conn.commit()
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Error deleting expense {expense_id}: {e}")
            return OperationResult.failed(InternalError(f"Error deleting expense: {e}"))

        if not deleted:
            return OperationResult.failed(NotFoundError("Expense not found"))

        logger.info(f"Deleted expense {expense_id}")
        return OperationResult(True, "Expense deleted successfully")

    def delete_all(self) -> OperationResult:
        """Delete every expense. Succeeds on an empty store."""
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute("DELETE FROM expenses")
                conn.commit()
                deleted = cursor.rowcount
        except sqlite3.Error as e:
            logger.error(f"Error deleting all expenses: {e}")
            return OperationResult.failed(InternalError(f"Error deleting expenses: {e}"))

        logger.info(f"Deleted {deleted} expense(s)")
        return OperationResult(True, f"Deleted {deleted} expenses")

    def find(self, expense_id: int) -> Optional[Expense]:
        """Get a single expense by ID.

        Args:
            expense_id: The expense ID to find.

        Returns:
            Expense object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(_EXPENSE_SELECT + " WHERE e.id = ?", (expense_id,))
            row = cursor.fetchone()

            if row:
                return self._row_to_expense(row)
            return None

    def count(self) -> int:
        """Get the total number of expenses."""
        with self.db_manager.connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM expenses").fetchone()[0]

    def list(self, page: int = 1, page_size: int = 20) -> List[Expense]:
        """Get one page of expenses, newest first.

        Args:
            page: 1-based page number.
            page_size: Number of expenses per page.

        Returns:
            List of Expense objects (empty past the last page).

        Raises:
            ValueError: If page or page_size is less than 1.
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be at least 1")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _EXPENSE_SELECT + _EXPENSE_ORDER + " LIMIT ? OFFSET ?",
                (page_size, (page - 1) * page_size),
            )
            return [self._row_to_expense(row) for row in cursor.fetchall()]

    def find_by_date_range(self, start_date: date, end_date: date) -> List[Expense]:
        """Get expenses dated within an inclusive range, newest first.

        Args:
            start_date: First day of the range.
            end_date: Last day of the range.

        Returns:
            List of Expense objects with category names joined in.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _EXPENSE_SELECT
                + " WHERE e.expense_date >= ? AND e.expense_date <= ?"
                + _EXPENSE_ORDER,
                (start_date.isoformat(), end_date.isoformat()),
            )
            return [self._row_to_expense(row) for row in cursor.fetchall()]

    def find_by_category(self, category_id: int) -> List[Expense]:
        """Get all expenses of one category, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _EXPENSE_SELECT + " WHERE e.category_id = ?" + _EXPENSE_ORDER,
                (category_id,),
            )
            return [self._row_to_expense(row) for row in cursor.fetchall()]

    def total_amount(self) -> Decimal:
        """Sum of all expense amounts."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT amount FROM expenses")
            return sum((Decimal(row[0]) for row in cursor.fetchall()), Decimal("0"))

    def total_amount_in_range(self, start_date: date, end_date: date) -> Decimal:
        """Sum of expense amounts dated within an inclusive range."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT amount FROM expenses WHERE expense_date >= ? AND expense_date <= ?",
                (start_date.isoformat(), end_date.isoformat()),
            )
            return sum((Decimal(row[0]) for row in cursor.fetchall()), Decimal("0"))

    def category_summaries(
        self, start_date: date, end_date: date
    ) -> List[CategorySummary]:
        """Group expenses in a date range by category.

        Amounts are summed as Decimal after fetching, then the groups are
        sorted by total, largest first. Percentages are left at zero; see
        ReportService for the derived shares.

        Args:
            start_date: First day of the range.
            end_date: Last day of the range.

        Returns:
            List of CategorySummary objects ordered by total_amount descending.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT e.category_id, c.name, e.amount
                FROM expenses e
                JOIN categories c ON c.id = e.category_id
                WHERE e.expense_date >= ? AND e.expense_date <= ?
                """,
                (start_date.isoformat(), end_date.isoformat()),
            )
            rows = cursor.fetchall()

        groups: Dict[Tuple[int, str], CategorySummary] = {}
        for category_id, name, amount in rows:
            key = (category_id, name)
            if key not in groups:
                groups[key] = CategorySummary(
                    category_id=category_id,
                    category_name=name,
                    total_amount=Decimal("0"),
                    expense_count=0,
                )
            groups[key].total_amount += Decimal(amount)
            groups[key].expense_count += 1

        return sorted(
            groups.values(),
            key=lambda s: (-s.total_amount, s.category_name.lower()),
        )

    def _row_to_expense(self, row: tuple) -> Expense:
        """Convert a database row to an Expense object."""
        return Expense(
            id=row[0],
            amount=Decimal(row[1]),
            date=date.fromisoformat(row[2]),
            category_id=row[3],
            notes=row[4] or "",
            category_name=row[5],
        )
