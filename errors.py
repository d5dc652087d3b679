"""Error taxonomy for ledger operations.

Every error carries a short, user-facing message. Stores raise these
internally and convert them to OperationResult at their public boundary.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed or out-of-policy input (empty name, bad amount, future date)."""


class ConflictError(LedgerError):
    """Uniqueness or referential conflict."""


class NotFoundError(LedgerError):
    """Operation targets an id that does not exist."""


class InternalError(LedgerError):
    """Unexpected storage fault."""
