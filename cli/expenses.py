#!/usr/bin/env python3

import sys
from datetime import date
from pathlib import Path

from cli.common import add_date_range_arguments, decimal_amount, iso_date
from logger import get_logger
from models.expense import Expense

logger = get_logger()


def _resolve_category_id(services, value: str) -> int:
    """Look up a category by ID or by name, exiting if it does not exist."""
    category = None
    try:
        category = services.categories.find(int(value))
    except ValueError:
        category = services.categories.find_by_name(value)

    if not category:
        logger.error(f"Category '{value}' not found.")
        logger.info("Use 'python -m cli categories list' to see available categories.")
        sys.exit(1)
    return category.id


def _print_expenses(expenses):
    for expense in expenses:
        logger.info(
            f"{expense.id:>6}  {expense.date.isoformat()}  {expense.amount:>12}  "
            f"{(expense.category_name or 'Unknown'):<25} {expense.notes}"
        )


def cmd_list(args, services):
    """List one page of expenses, newest first."""
    try:
        expenses = services.expenses.list(args.page, args.page_size)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    total = services.expenses.count()
    if not expenses:
        logger.info("No expenses found.")
        return

    _print_expenses(expenses)
    pages = (total + args.page_size - 1) // args.page_size
    logger.info(f"\nPage {args.page} of {pages} ({total} expenses)")


def cmd_add(args, services):
    """Record a new expense."""
    expense = Expense(
        id=None,
        amount=args.amount,
        date=args.date or date.today(),
        category_id=_resolve_category_id(services, args.category),
        notes=args.notes or "",
    )
    result = services.expenses.add(expense)
    if not result.success:
        logger.error(result.message)
        sys.exit(1)
    logger.info(f"✓ {result.message} (ID: {result.entity.id})")


def cmd_update(args, services):
    """Replace the fields of an existing expense."""
    existing = services.expenses.find(args.expense_id)
    if not existing:
        logger.error(f"Expense with ID {args.expense_id} not found.")
        sys.exit(1)

    if args.amount is not None:
        existing.amount = args.amount
    if args.date is not None:
        existing.date = args.date
    if args.category is not None:
        existing.category_id = _resolve_category_id(services, args.category)
    if args.notes is not None:
        existing.notes = args.notes

    result = services.expenses.update(existing)
    if not result.success:
        logger.error(result.message)
        sys.exit(1)
    logger.info(f"✓ {result.message}")


def cmd_delete(args, services):
    """Delete a single expense."""
    result = services.expenses.delete(args.expense_id)
    if not result.success:
        logger.error(result.message)
        sys.exit(1)
    logger.info(f"✓ {result.message}")


def cmd_delete_all(args, services):
    """Delete every expense after confirmation."""
    confirm = (
        input("\nThis deletes ALL expenses. Continue? (yes/no): ").strip().lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    result = services.expenses.delete_all()
    if not result.success:
        logger.error(result.message)
        sys.exit(1)
    logger.info(f"✓ {result.message}")


def cmd_total(args, services):
    """Show the total spent, optionally within a date range."""
    if args.start or args.end:
        total = services.expenses.total_amount_in_range(
            args.start or date.min, args.end or date.max
        )
    else:
        total = services.expenses.total_amount()
    logger.info(f"Total spent: {total}")


def cmd_export(args, services):
    """Export expenses to a CSV file."""
    csv_text = services.export_import.export_to_csv(args.start, args.end)

    output_path = (
        Path(args.output)
        if args.output
        else services.config.export_dir
        / f"expenses_{date.today().strftime('%Y%m%d')}.csv"
    )
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            f.write(csv_text)
    except OSError as e:
        logger.error(f"Error writing export file: {e}")
        sys.exit(1)

    logger.info(f"✓ Exported expenses to: {output_path}")


def cmd_import(args, services):
    """Import expenses from a CSV file."""
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    with open(csv_path, "r", newline="", encoding="utf-8-sig") as f:
        content = f.read()

    result = services.export_import.import_from_csv(content)
    if not result.success:
        logger.error(result.message)
        sys.exit(1)
    logger.info(f"✓ {result.message}")


def setup_parser(subparsers):
    """Setup expenses subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "expenses",
        help="Manage expenses",
        description="Record, list, import and export expenses",
    )

    expenses_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available expense commands",
        dest="subcommand",
        required=True,
    )

    list_parser = expenses_subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument("--page", type=int, default=1, help="Page number")
    list_parser.add_argument(
        "--page-size", type=int, default=20, help="Expenses per page"
    )
    list_parser.set_defaults(func=cmd_list)

    add_parser = expenses_subparsers.add_parser("add", help="Record an expense")
    add_parser.add_argument("--amount", type=decimal_amount, required=True)
    add_parser.add_argument(
        "--date", type=iso_date, help="Expense date (YYYY-MM-DD, default today)"
    )
    add_parser.add_argument(
        "--category", required=True, help="Category ID or name"
    )
    add_parser.add_argument("--notes", help="Free-text notes")
    add_parser.set_defaults(func=cmd_add)

    update_parser = expenses_subparsers.add_parser(
        "update", help="Change an expense"
    )
    update_parser.add_argument("expense_id", type=int, help="ID of the expense")
    update_parser.add_argument("--amount", type=decimal_amount)
    update_parser.add_argument("--date", type=iso_date)
    update_parser.add_argument("--category", help="Category ID or name")
    update_parser.add_argument("--notes")
    update_parser.set_defaults(func=cmd_update)

    delete_parser = expenses_subparsers.add_parser(
        "delete", help="Delete an expense by ID"
    )
    delete_parser.add_argument("expense_id", type=int, help="ID of the expense")
    delete_parser.set_defaults(func=cmd_delete)

    delete_all_parser = expenses_subparsers.add_parser(
        "delete-all", help="Delete all expenses"
    )
    delete_all_parser.set_defaults(func=cmd_delete_all)

    total_parser = expenses_subparsers.add_parser("total", help="Show total spent")
    add_date_range_arguments(total_parser)
    total_parser.set_defaults(func=cmd_total)

    export_parser = expenses_subparsers.add_parser(
        "export", help="Export expenses to CSV"
    )
    add_date_range_arguments(export_parser)
    export_parser.add_argument(
        "--output", "-o", help="Output file (default: export_dir/expenses_DATE.csv)"
    )
    export_parser.set_defaults(func=cmd_export)

    import_parser = expenses_subparsers.add_parser(
        "import", help="Import expenses from CSV"
    )
    import_parser.add_argument("csv_file", help="Path to the CSV file")
    import_parser.set_defaults(func=cmd_import)
