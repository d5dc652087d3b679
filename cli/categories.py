#!/usr/bin/env python3

import sys
from logger import get_logger
from models.category import Category

logger = get_logger()


def _report(result):
    """Log an OperationResult and exit non-zero on failure."""
    if result.success:
        logger.info(f"✓ {result.message}")
    else:
        logger.error(result.message)
        sys.exit(1)


def cmd_list(args, services):
    """List all categories with their expense counts."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found. Use 'python -m cli categories seed'.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 60)
    for category in categories:
        count = services.categories.expense_count(category.id)
        logger.info(f"{category.id:>4}  {category.name:<40} {count:>6} expense(s)")
    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_add(args, services):
    """Add a new category."""
    result = services.categories.add(Category(id=None, name=args.name))
    _report(result)
    if result.success:
        logger.info(f"  ID: {result.entity.id}")


def cmd_rename(args, services):
    """Rename an existing category."""
    _report(services.categories.update(Category(id=args.category_id, name=args.name)))


def cmd_delete(args, services):
    """Delete a category that has no expenses."""
    _report(services.categories.delete(args.category_id))


def cmd_seed(args, services):
    """Insert the default categories into an empty ledger."""
    inserted = services.categories.ensure_defaults_seeded()
    if inserted:
        logger.info(f"✓ Created {inserted} default categories")
    else:
        logger.info("Categories already exist, nothing to seed.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, rename, list, and delete expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    add_parser = categories_subparsers.add_parser("add", help="Add a category")
    add_parser.add_argument("name", help="Category name")
    add_parser.set_defaults(func=cmd_add)

    rename_parser = categories_subparsers.add_parser(
        "rename", help="Rename a category"
    )
    rename_parser.add_argument("category_id", type=int, help="ID of the category")
    rename_parser.add_argument("name", help="New category name")
    rename_parser.set_defaults(func=cmd_rename)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories"
    )
    seed_parser.set_defaults(func=cmd_seed)
