from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

MAX_NOTES_LENGTH = 500

# Largest accepted amount (the range of a 96-bit decimal). Keeps sums finite.
MAX_AMOUNT = Decimal("79228162514264337593543950335")


@dataclass
class Expense:
    id: Optional[int]  # assigned by the store on insert
    amount: Decimal  # must be > 0
    date: date
    category_id: int
    notes: str = ""
    category_name: Optional[str] = None  # joined on read, never written
