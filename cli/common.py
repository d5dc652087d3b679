"""Argument parsing helpers shared by CLI commands."""

import argparse
from datetime import date
from decimal import Decimal, InvalidOperation


def iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', use YYYY-MM-DD")


def decimal_amount(value: str) -> Decimal:
    """argparse type for decimal amounts."""
    if "_" in value:
        raise argparse.ArgumentTypeError(f"Invalid amount '{value}'")
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid amount '{value}'")


def add_date_range_arguments(parser) -> None:
    """Add optional --start/--end date arguments."""
    parser.add_argument("--start", type=iso_date, help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", type=iso_date, help="Last day (YYYY-MM-DD)")
