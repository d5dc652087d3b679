"""CSV export and fault-tolerant CSV import of expenses."""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from dateutil import parser as date_parser

from csv_codec import FORMULA_PREFIXES, escape_field, parse_line
from errors import InternalError, LedgerError
from logger import get_logger
from models.category import FALLBACK_CATEGORY_NAME, category_key
from models.expense import Expense
from models.results import ImportResult

logger = get_logger()

CSV_HEADER = "Date,Amount,Category,Notes"

# Inline error examples in the import summary
MAX_REPORTED_ERRORS = 5

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _parse_date(value: str) -> Optional[date]:
    """Parse a date leniently (ISO, US and written-out forms)."""
    value = value.strip()
    if not value:
        return None
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        return None


def _parse_amount(value: str) -> Optional[Decimal]:
    """Parse a decimal amount; the sign is checked later, on insert."""
    value = value.strip()
    # Decimal() also accepts digit-group underscores
    if "_" in value:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


class ExportImportService:
    """Moves expenses between the stores and CSV text.

    Export and import work on strings only; reading and writing files is
    left to the caller.
    """

    def __init__(self, expenses, categories):
        """Initialize the export/import service.

        Args:
            expenses: ExpenseService used to read and add expenses.
            categories: CategoryService used to resolve category names.
        """
        self.expenses = expenses
        self.categories = categories

    def export_to_csv(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> str:
        """Render expenses in a date range as CSV text.

        Args:
            start_date: First day to include (default: no lower bound).
            end_date: Last day to include (default: no upper bound).

        Returns:
            CSV text with a header line and one line per expense, newest first.
        """
        start = start_date or date.min
        end = end_date or date.max
        expenses = self.expenses.find_by_date_range(start, end)

        lines = [CSV_HEADER]
        for expense in expenses:
            category_name = expense.category_name or "Unknown"
            lines.append(
                ",".join(
                    [
                        expense.date.isoformat(),
                        str(expense.amount),
                        escape_field(category_name),
                        escape_field(expense.notes),
                    ]
                )
            )

        logger.info(f"Exported {len(expenses)} expense(s) from {start} to {end}")
        return "\n".join(lines) + "\n"

    def import_from_csv(self, csv_content: str) -> ImportResult:
        """Import expenses from CSV text, skipping rows that cannot be used.

        Unknown category names are filed under "Other", which is created on
        demand. A bad row never stops the import; only a file without data
        rows or an unexpected storage fault makes the call fail, and rows
        imported before a fault are kept.

        Args:
            csv_content: Whole CSV document including the header line.

        Returns:
            ImportResult with the number of imported rows and a summary.
        """
        imported_count = 0
        try:
            # Blank lines are dropped before numbering; the header is line 1
            lines = list(
                enumerate(
                    (line for line in _LINE_BREAK.split(csv_content or "") if line),
                    start=1,
                )
            )
            if len(lines) < 2:
                logger.warning("Import aborted: CSV file has no data rows")
                return ImportResult(
                    False, "CSV file is empty or has no data rows", 0
                )

            skipped_count = 0
            errors: List[str] = []
            category_ids = self._category_snapshot()

            for line_number, line in lines[1:]:
                fields = parse_line(line)
                if len(fields) < 3:
                    logger.warning(f"Skipping line {line_number}: too few fields")
                    skipped_count += 1
                    continue

                expense_date = _parse_date(fields[0])
                amount = _parse_amount(fields[1])
                category_name = fields[2].strip()
                if expense_date is None or amount is None or not category_name:
                    logger.warning(f"Skipping line {line_number}: unreadable values")
                    skipped_count += 1
                    continue

                category_id = _resolve_category(category_ids, category_name)
                if category_id is None:
                    category_id = category_ids.get(category_key(FALLBACK_CATEGORY_NAME))
                if category_id is None:
                    try:
                        fallback = self.categories.get_or_create(FALLBACK_CATEGORY_NAME)
                    except LedgerError as e:
                        logger.error(f"Line {line_number}: {e.message}")
                        errors.append(
                            f"Line {line_number}: Could not create "
                            f"'{FALLBACK_CATEGORY_NAME}' category"
                        )
                        skipped_count += 1
                        continue
                    category_ids = self._category_snapshot()
                    category_id = fallback.id

                expense = Expense(
                    id=None,
                    amount=amount,
                    date=expense_date,
                    category_id=category_id,
                    notes=fields[3] if len(fields) > 3 else "",
                )

                result = self.expenses.add(expense)
                if result.success:
                    imported_count += 1
                elif isinstance(result.error, InternalError):
                    raise result.error
                else:
                    errors.append(f"Line {line_number}: {result.message}")
                    skipped_count += 1

            message = _summarize(imported_count, skipped_count, errors)
            logger.info(message)
            return ImportResult(True, message, imported_count)

        except Exception as e:
            logger.error(
                f"Error importing CSV after {imported_count} imported row(s): {e}"
            )
            return ImportResult(False, f"Error importing CSV: {e}", imported_count)

    def _category_snapshot(self) -> Dict[str, int]:
        """Map case-folded category names to ids for one import call."""
        return {
            category_key(category.name): category.id
            for category in self.categories.find_all()
            if category.name
        }


def _resolve_category(category_ids: Dict[str, int], name: str) -> Optional[int]:
    """Look up a category id by name.

    A name exported with the formula guard (a leading single quote before a
    formula character) also matches the unguarded category.
    """
    category_id = category_ids.get(category_key(name))
    guarded = name.startswith("'") and name[1:].startswith(FORMULA_PREFIXES)
    if category_id is None and guarded:
        category_id = category_ids.get(category_key(name[1:]))
    return category_id


def _summarize(imported_count: int, skipped_count: int, errors: List[str]) -> str:
    """Compose the user-facing import summary."""
    message = f"Successfully imported {imported_count} expenses"
    if skipped_count > 0:
        message += f", skipped {skipped_count} invalid rows"
    if errors:
        message += "\nErrors: " + "; ".join(errors[:MAX_REPORTED_ERRORS])
        if len(errors) > MAX_REPORTED_ERRORS:
            message += f" and {len(errors) - MAX_REPORTED_ERRORS} more..."
    return message
