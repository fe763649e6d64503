# ABOUTME: Generic optimistic-update routine with snapshot rollback.
# ABOUTME: Applies a local change, awaits the remote write, and restores the snapshot on rejection.

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from oneword.backend.exceptions import DataStoreError
from oneword.mutations.results import MutationResult, MutationStatus
from oneword.rate_limit.service import RateLimiter

logger = logging.getLogger(__name__)

S = TypeVar("S")

DEFAULT_FAILURE_MESSAGE = "Something went wrong. Try again."


class InFlightGuard:
    """Cooperative mutex for one item's remote call.

    Not a queue: an attempt made while the guard is held is dropped.
    """

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        """True while a remote call for the item is pending."""
        return self._busy

    def try_acquire(self) -> bool:
        """Take the guard if it is free.

        Returns:
            True if acquired, False if another call is in flight.
        """
        if self._busy:
            return False
        self._busy = True
        return True

    def release(self) -> None:
        """Free the guard."""
        self._busy = False


async def run_optimistic(
    guard: InFlightGuard,
    capture: Callable[[], S],
    apply: Callable[[], None],
    remote: Callable[[], Awaitable[Any]],
    restore: Callable[[S], None],
    *,
    limiter: RateLimiter | None = None,
    on_duplicate: Callable[[S], None] | None = None,
    failure_message: str = DEFAULT_FAILURE_MESSAGE,
) -> MutationResult:
    """Run one optimistic mutation.

    The in-flight check comes first so a dropped attempt never consumes a
    rate limit slot. Between capture() and the await of remote() nothing
    else can run, so the snapshot is exactly the pre-mutation state.

    Args:
        guard: In-flight guard of the item being mutated.
        capture: Returns a snapshot of the current local state.
        apply: Applies the optimistic local change.
        remote: Performs the backend write(s).
        restore: Puts a snapshot back verbatim.
        limiter: Rate limiter checked before anything is applied.
        on_duplicate: Called with the snapshot when the backend reports a
            unique violation, meaning the change was already made. Without
            it a unique violation is rolled back like any other rejection.
        failure_message: Message reported after a rollback.

    Returns:
        MutationResult describing the outcome.
    """
    if guard.busy:
        return MutationResult(MutationStatus.SKIPPED)
    if limiter is not None and not limiter.check():
        return MutationResult.rate_limited(limiter.retry_after())

    guard.try_acquire()
    try:
        snapshot = capture()
        apply()
        try:
            await remote()
        except DataStoreError as e:
            if e.is_unique_violation and on_duplicate is not None:
                on_duplicate(snapshot)
                return MutationResult(MutationStatus.ALREADY_DONE)
            restore(snapshot)
            logger.warning("Remote write rejected (%s), rolled back: %s", e.code, e)
            return MutationResult(MutationStatus.ROLLED_BACK, message=failure_message, error=e)
        except Exception:
            restore(snapshot)
            raise
        return MutationResult(MutationStatus.COMMITTED)
    finally:
        guard.release()
