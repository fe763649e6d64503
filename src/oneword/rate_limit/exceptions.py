# ABOUTME: Exception classes for rate limiting functionality.
# ABOUTME: Contains RateLimitExceeded exception raised when a guarded action is denied.

from oneword.errors import OneWordError


class RateLimitExceeded(OneWordError):
    """Exception raised when the rate limit has been exceeded.

    Attributes:
        retry_after: Whole seconds until the next action is allowed.
    """

    def __init__(self, message: str, retry_after: int = 0) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the error.
            retry_after: Whole seconds until a slot frees up.
        """
        super().__init__(message)
        self.retry_after = retry_after
