"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from models.expense import Expense


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def make_expense(category_id, amount="10.00", when=None, notes="") -> Expense:
    """Build an unsaved expense with sensible defaults."""
    return Expense(
        id=None,
        amount=Decimal(amount),
        date=when or date(2025, 1, 15),
        category_id=category_id,
        notes=notes,
    )
