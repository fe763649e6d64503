# ABOUTME: Two-step delete flow for a user's own word.
# ABOUTME: Nothing is removed locally until the backend confirms the delete.

from enum import Enum

from oneword.backend.protocol import DataStore
from oneword.mutations.optimistic import InFlightGuard, run_optimistic
from oneword.mutations.results import MutationResult, MutationStatus
from oneword.rate_limit.service import RateLimiter


class DeleteState(str, Enum):
    """Where the delete control is in its confirm cycle."""

    IDLE = "idle"
    CONFIRMING = "confirming"
    DELETING = "deleting"
    DELETED = "deleted"


class DeletePostFlow:
    """Delete control for one word: press delete, then confirm with yes or no."""

    def __init__(
        self,
        word_id: str,
        user_id: str,
        store: DataStore,
        limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the flow.

        Args:
            word_id: Word to delete.
            user_id: Owner of the word; only their row matches the delete.
            store: Data store holding the words table.
            limiter: Rate limiter for deletions.
        """
        self.word_id = word_id
        self.user_id = user_id
        self.state = DeleteState.IDLE
        self._store = store
        self._limiter = limiter
        self._guard = InFlightGuard()

    @property
    def in_flight(self) -> bool:
        """True while the delete is pending."""
        return self._guard.busy

    @property
    def deleted(self) -> bool:
        """True once the backend has removed the word."""
        return self.state is DeleteState.DELETED

    def request(self) -> None:
        """First press: ask for confirmation."""
        if self.state is DeleteState.IDLE:
            self.state = DeleteState.CONFIRMING

    def cancel(self) -> None:
        """Answer no: back to idle."""
        if self.state is DeleteState.CONFIRMING:
            self.state = DeleteState.IDLE

    def _restore(self, snapshot: DeleteState) -> None:
        self.state = DeleteState.IDLE

    async def _remote(self) -> None:
        await self._store.delete("words", {"id": self.word_id, "user_id": self.user_id})

    async def confirm(self) -> MutationResult:
        """Answer yes: delete the word.

        Returns:
            COMMITTED with state DELETED on success, ROLLED_BACK with state
            IDLE on failure, SKIPPED if no confirmation was pending.
        """
        if self.state is not DeleteState.CONFIRMING:
            return MutationResult(MutationStatus.SKIPPED)

        def mark_deleting() -> None:
            self.state = DeleteState.DELETING

        result = await run_optimistic(
            self._guard,
            capture=lambda: self.state,
            apply=mark_deleting,
            remote=self._remote,
            restore=self._restore,
            limiter=self._limiter,
            failure_message="Couldn't delete. Try again.",
        )
        if result.status is MutationStatus.COMMITTED:
            self.state = DeleteState.DELETED
        return result
