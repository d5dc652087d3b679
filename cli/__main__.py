#!/usr/bin/env python3
"""
Ledger CLI - Command-line interface for the personal expense ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage expense categories
    expenses     Record, list, import and export expenses
    reports      Spending summaries
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli expenses add --amount 12.50 --date 2025-01-15 --category Food
    python -m cli expenses import expenses.csv
    python -m cli expenses export --output expenses.csv
    python -m cli reports summary --month 2025/01
"""

import sys
import argparse
from cli import categories, expenses, reports, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Ledger - Personal expense tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    expenses.setup_parser(subparsers)
    reports.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command in ("categories", "expenses", "reports"):
                args.func(args, Services(config))
            elif args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
            else:
                args.func(args)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
