"""Per-category spending summary over a date range."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CategorySummary:
    """Aggregated spending for one category.

    Not persisted; recomputed on demand.

    Attributes:
        category_id: Category the expenses belong to.
        category_name: Name of that category.
        total_amount: Sum of expense amounts in the range.
        expense_count: Number of expenses in the range.
        percentage: Share of the period total on a 0-100 scale.
    """

    category_id: int
    category_name: str
    total_amount: Decimal
    expense_count: int
    percentage: Decimal = Decimal("0")
