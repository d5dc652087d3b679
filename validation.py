"""Validation rules shared by single-record writes and the CSV importer.

Both ExpenseService.add/update and the bulk import go through
validate_expense, so the rules cannot drift apart between the two paths.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from errors import ValidationError
from models.category import MAX_CATEGORY_NAME_LENGTH
from models.expense import Expense, MAX_AMOUNT, MAX_NOTES_LENGTH


@dataclass
class ValidationOutcome:
    """Tagged result of validating an expense.

    Attributes:
        ok: True if the expense may be persisted.
        message: Reason for rejection, empty when ok.
        expense: Normalized copy of the input (notes trimmed and truncated),
            None when rejected.
    """

    ok: bool
    message: str = ""
    expense: Optional[Expense] = None


def normalize_notes(notes: Optional[str]) -> str:
    """Trim notes and silently cut them to the maximum length."""
    if not notes:
        return ""
    return notes.strip()[:MAX_NOTES_LENGTH]


def validate_expense(
    expense: Expense,
    category_exists: Callable[[int], bool],
    today: Optional[date] = None,
) -> ValidationOutcome:
    """Check an expense against the business rules.

    Args:
        expense: Expense to validate. Not modified.
        category_exists: Callable answering whether a category id is known.
        today: Reference date for the future-date rule (defaults to today).

    Returns:
        ValidationOutcome with the normalized expense on success.
    """
    today = today or date.today()

    text = str(expense.amount).strip()
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        amount = None
    # Decimal() also accepts digit-group underscores
    if amount is None or "_" in text:
        return ValidationOutcome(ok=False, message="Amount must be a number")
    if not amount.is_finite() or amount <= 0:
        return ValidationOutcome(ok=False, message="Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        return ValidationOutcome(ok=False, message="Amount is too large")

    if expense.date > today:
        return ValidationOutcome(ok=False, message="Date cannot be in the future")

    if expense.category_id is None or not category_exists(expense.category_id):
        return ValidationOutcome(
            ok=False, message="Selected category does not exist"
        )

    normalized = replace(expense, amount=amount, notes=normalize_notes(expense.notes))
    return ValidationOutcome(ok=True, expense=normalized)


def validate_category_name(name: Optional[str]) -> str:
    """Validate a category name and return it trimmed.

    Raises:
        ValidationError: If the name is empty, blank, or too long.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("Category name cannot be empty")
    if len(trimmed) > MAX_CATEGORY_NAME_LENGTH:
        raise ValidationError(
            f"Category name cannot exceed {MAX_CATEGORY_NAME_LENGTH} characters"
        )
    return trimmed
