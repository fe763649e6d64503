# ABOUTME: Exceptions raised by backend collaborators (data store, object storage).
# ABOUTME: DataStoreError carries a machine-readable SQLSTATE-style code next to the message.

from oneword.errors import OneWordError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
INTEGRITY_VIOLATION = "23000"
UNDEFINED_COLUMN = "42703"
UNDEFINED_TABLE = "42P01"
INVALID_INPUT = "22P02"


class DataStoreError(OneWordError):
    """A row-level read or write was rejected by the data store.

    Attributes:
        code: SQLSTATE-style error code, or None when the failure has none
            (network errors, timeouts).
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description from the store.
            code: Machine-readable error code.
        """
        super().__init__(message)
        self.code = code

    @property
    def is_unique_violation(self) -> bool:
        """True if a uniqueness constraint rejected the write."""
        return self.code == UNIQUE_VIOLATION


class StorageError(OneWordError):
    """An object storage upload or lookup failed."""

    pass
