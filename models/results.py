"""Result values returned to callers instead of raising."""

from dataclasses import dataclass
from typing import Any, Optional

from errors import LedgerError


@dataclass
class OperationResult:
    """Outcome of a single-record store operation.

    Attributes:
        success: Whether the operation was applied.
        message: Short sentence suitable for direct display.
        entity: The created or updated record, when there is one.
        error: The typed error behind a failure, None on success.
    """

    success: bool
    message: str
    entity: Optional[Any] = None
    error: Optional[LedgerError] = None

    @classmethod
    def failed(cls, error: LedgerError) -> "OperationResult":
        """Build a failed result carrying the error and its message."""
        return cls(success=False, message=error.message, error=error)

    def __bool__(self) -> bool:
        return self.success


@dataclass
class ImportResult:
    """Outcome of a bulk CSV import.

    Attributes:
        success: False only for an empty file or an unexpected fault.
        message: Summary including skipped rows and the first few errors.
        imported_count: Rows persisted, including partial progress on faults.
    """

    success: bool
    message: str
    imported_count: int
