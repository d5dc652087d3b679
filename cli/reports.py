#!/usr/bin/env python3

import sys
from datetime import date

from dateutil.relativedelta import relativedelta

from cli.common import add_date_range_arguments
from logger import get_logger

logger = get_logger()


def cmd_summary(args, services):
    """Show spending per category for a month or a date range."""
    if args.month:
        try:
            year, month = (int(part) for part in args.month.split("/"))
            start_date = date(year, month, 1)
        except ValueError:
            logger.error("Use YYYY/MM format for --month")
            sys.exit(1)
        end_date = start_date + relativedelta(months=1) - relativedelta(days=1)
    else:
        # Default to the current month
        start_date = args.start or date.today().replace(day=1)
        end_date = args.end or date.today()

    summaries = services.reports.category_summaries(start_date, end_date)
    if not summaries:
        logger.info(f"No expenses between {start_date} and {end_date}.")
        return

    logger.info(f"\nSpending from {start_date} to {end_date}")
    logger.info("=" * 70)
    for summary in summaries:
        logger.info(
            f"{summary.category_name:<30} {summary.total_amount:>12} "
            f"{summary.expense_count:>5} {summary.percentage:>7}%"
        )
    logger.info("-" * 70)
    total = sum(s.total_amount for s in summaries)
    logger.info(f"{'Total':<30} {total:>12}")


def setup_parser(subparsers):
    """Setup reports subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reports",
        help="Spending reports",
        description="Summaries of spending per category",
    )

    reports_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    summary_parser = reports_subparsers.add_parser(
        "summary", help="Spending per category"
    )
    summary_parser.add_argument("--month", help="Month in YYYY/MM format")
    add_date_range_arguments(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)
