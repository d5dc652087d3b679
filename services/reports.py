"""Reporting service for spending summaries."""

import calendar
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from models.category_summary import CategorySummary

_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")


class ReportService:
    """Derives per-category shares from the expense store's grouped totals."""

    def __init__(self, expenses):
        """Initialize the report service.

        Args:
            expenses: ExpenseService providing grouped totals.
        """
        self.expenses = expenses

    def category_summaries(
        self, start_date: date, end_date: date
    ) -> List[CategorySummary]:
        """Summarize spending per category over an inclusive date range.

        Each summary's percentage is its share of the grand total of the
        same result set, on a 0-100 scale rounded to two decimals. All
        percentages are 0 when the grand total is 0.

        Args:
            start_date: First day of the range.
            end_date: Last day of the range.

        Returns:
            List of CategorySummary objects ordered by total_amount descending.
        """
        summaries = self.expenses.category_summaries(start_date, end_date)
        grand_total = sum((s.total_amount for s in summaries), Decimal("0"))

        for summary in summaries:
            if grand_total == 0:
                summary.percentage = Decimal("0")
            else:
                share = summary.total_amount / grand_total * _HUNDRED
                summary.percentage = share.quantize(_CENT, rounding=ROUND_HALF_UP)

        return summaries

    def monthly_summaries(self, year: int, month: int) -> List[CategorySummary]:
        """Summarize spending per category for one calendar month.

        Args:
            year: Year (e.g., 2025).
            month: Month (1-12).
        """
        last_day = calendar.monthrange(year, month)[1]
        return self.category_summaries(date(year, month, 1), date(year, month, last_day))
