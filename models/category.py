"""Category model for grouping expenses."""

from dataclasses import dataclass
from typing import Optional

# Inserted, in this order, into an empty category table.
DEFAULT_CATEGORY_NAMES = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Bills & Utilities",
    "Shopping",
    "Healthcare",
    "Education",
    "Travel",
    "Other",
)

# Where imported rows land when their category name is unknown.
FALLBACK_CATEGORY_NAME = "Other"

MAX_CATEGORY_NAME_LENGTH = 100


@dataclass
class Category:
    """Represents a named expense category.

    Attributes:
        id: Unique identifier (assigned by the store, None before insert).
        name: Category name, unique regardless of case.
    """

    id: Optional[int]
    name: str


def category_key(name: str) -> str:
    """Case-folded form of a name, used for lookups and uniqueness."""
    return name.strip().casefold()
