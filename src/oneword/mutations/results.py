# ABOUTME: Outcome types returned by every user-initiated mutation flow.
# ABOUTME: Flows report failures as a MutationResult instead of raising to the caller.

from dataclasses import dataclass
from enum import Enum


class MutationStatus(str, Enum):
    """How a mutation attempt ended."""

    COMMITTED = "committed"
    ALREADY_DONE = "already_done"
    ROLLED_BACK = "rolled_back"
    FAILED = "failed"
    RATE_LIMITED = "rate_limited"
    INVALID = "invalid"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MutationResult:
    """Result of one mutation attempt.

    Attributes:
        status: How the attempt ended.
        message: Inline message to show next to the control, if any.
        retry_after: Seconds to wait when status is RATE_LIMITED.
        error: The backend error behind a ROLLED_BACK or FAILED status.
    """

    status: MutationStatus
    message: str | None = None
    retry_after: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the backend now reflects the requested change."""
        return self.status in (MutationStatus.COMMITTED, MutationStatus.ALREADY_DONE)

    @classmethod
    def rate_limited(cls, retry_after: int) -> "MutationResult":
        """Result for an action denied by its rate limiter."""
        return cls(
            MutationStatus.RATE_LIMITED,
            message=f"Slow down. Try again in {retry_after}s.",
            retry_after=retry_after,
        )
