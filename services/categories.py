"""Category service for database operations."""

import sqlite3
from typing import List, Optional

from errors import ConflictError, InternalError, LedgerError, NotFoundError
from logger import get_logger
from models.category import Category, DEFAULT_CATEGORY_NAMES, category_key
from models.results import OperationResult
from validation import validate_category_name

logger = get_logger()


class CategoryService:
    """Service for managing categories.

    Write operations return an OperationResult instead of raising, so the
    message can be shown to the user as is.
    """

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM categories ORDER BY name_key, id"
            )
            return [Category(id=row[0], name=row[1]) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM categories WHERE id = ?", (category_id,)
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1])
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name, ignoring case and surrounding spaces.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM categories WHERE name_key = ?",
                (category_key(name or ""),),
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1])
            return None

    def exists(self, category_id: int) -> bool:
        """Check whether a category ID is known."""
        return self.find(category_id) is not None

    def expense_count(self, category_id: int) -> int:
        """Count expenses that reference a category."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM expenses WHERE category_id = ?", (category_id,)
            )
            return cursor.fetchone()[0]

    def add(self, category: Category) -> OperationResult:
        """Add a new category.

        On success the category's id is populated and it is returned as the
        result entity.

        Args:
            category: Category to add. Its id is ignored.

        Returns:
            OperationResult describing the outcome.
        """
        try:
            name = validate_category_name(category.name)
            if self.find_by_name(name):
                raise ConflictError(f"A category named '{name}' already exists")

            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO categories (name, name_key) VALUES (?, ?)",
                    (name, category_key(name)),
                )
                conn.commit()
                category.id = cursor.lastrowid
                category.name = name
        except LedgerError as e:
            logger.warning(f"Category not added: {e.message}")
            return OperationResult.failed(e)
        except sqlite3.IntegrityError:
            error = ConflictError(
                f"A category named '{category.name.strip()}' already exists"
            )
            logger.warning(f"Category not added: {error.message}")
            return OperationResult.failed(error)
        except sqlite3.Error as e:
            logger.error(f"Error adding category: {e}")
            return OperationResult.failed(InternalError(f"Error adding category: {e}"))

        logger.info(f"Created category '{category.name}' (ID: {category.id})")
        return OperationResult(True, "Category added successfully", category)

    def update(self, category: Category) -> OperationResult:
        """Rename an existing category.

        Renaming a category to its own name (in any case) is allowed.

        Args:
            category: Category with the id to update and the new name.

        Returns:
            OperationResult describing the outcome.
        """
        try:
            if category.id is None or not self.exists(category.id):
                raise NotFoundError("Category not found")

            name = validate_category_name(category.name)

            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "SELECT id FROM categories WHERE name_key = ? AND id != ?",
                    (category_key(name), category.id),
                )
                if cursor.fetchone():
                    raise ConflictError(f"A category named '{name}' already exists")

                conn.execute(
                    "UPDATE categories SET name = ?, name_key = ? WHERE id = ?",
                    (name, category_key(name), category.id),
                )
                conn.commit()
                category.name = name
        except LedgerError as e:
            logger.warning(f"Category {category.id} not updated: {e.message}")
            return OperationResult.failed(e)
        except sqlite3.Error as e:
            logger.error(f"Error updating category {category.id}: {e}")
            return OperationResult.failed(InternalError(f"Error updating category: {e}"))

        logger.info(f"Renamed category {category.id} to '{category.name}'")
        return OperationResult(True, "Category updated successfully", category)

    def delete(self, category_id: int) -> OperationResult:
        """Delete a category that no expense references.

        Args:
            category_id: The category ID to delete.

        Returns:
            OperationResult describing the outcome. A blocked deletion names
            the number of expenses still using the category.
        """
        try:
            category = self.find(category_id)
            if category is None:
                raise NotFoundError("Category not found")

            count = self.expense_count(category_id)
            if count > 0:
                noun = "expense" if count == 1 else "expenses"
                raise ConflictError(
                    f"Cannot delete category '{category.name}': "
                    f"it is used by {count} {noun}"
                )

            with self.db_manager.connect() as conn:
                conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
                conn.commit()
        except LedgerError as e:
            logger.warning(f"Category {category_id} not deleted: {e.message}")
            return OperationResult.failed(e)
        except sqlite3.Error as e:
            logger.error(f"Error deleting category {category_id}: {e}")
            return OperationResult.failed(InternalError(f"Error deleting category: {e}"))

        logger.info(f"Deleted category '{category.name}' (ID: {category_id})")
        return OperationResult(True, "Category deleted successfully")

    def get_or_create(self, name: str) -> Category:
        """Return the category with this name, creating it if needed.

        The insert and the lookup rely on the unique case-folded name_key,
        so two callers racing on the same name end up with the same row.

        Args:
            name: Category name.

        Returns:
            The existing or newly created Category.

        Raises:
            ValidationError: If the name is empty or too long.
            InternalError: If the database rejects the operation.
        """
        name = validate_category_name(name)
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO categories (name, name_key) VALUES (?, ?) "
                    "ON CONFLICT(name_key) DO NOTHING",
                    (name, category_key(name)),
                )
                conn.commit()
                created = cursor.rowcount > 0

                row = conn.execute(
                    "SELECT id, name FROM categories WHERE name_key = ?",
                    (category_key(name),),
                ).fetchone()
        except sqlite3.Error as e:
            raise InternalError(f"Could not create category '{name}': {e}") from e

        if row is None:
            raise InternalError(f"Could not create category '{name}'")

        if created:
            logger.info(f"Created category '{row[1]}' (ID: {row[0]})")
        return Category(id=row[0], name=row[1])

    def ensure_defaults_seeded(self) -> int:
        """Insert the default categories if the table is empty.

        Returns:
            Number of categories inserted (0 if any category already existed).
        """
        with self.db_manager.connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
            if count > 0:
                return 0

            conn.executemany(
                "INSERT INTO categories (name, name_key) VALUES (?, ?)",
                [(name, category_key(name)) for name in DEFAULT_CATEGORY_NAMES],
            )
            conn.commit()

        logger.info(f"Seeded {len(DEFAULT_CATEGORY_NAMES)} default categories")
        return len(DEFAULT_CATEGORY_NAMES)
