# ABOUTME: Sliding-window rate limiter guarding bursts of client-initiated writes.
# ABOUTME: Keeps action timestamps in memory only; one instance per action class per UI element.

import math
import time
from collections import deque
from collections.abc import Callable

from oneword.config import Settings
from oneword.rate_limit.actions import ActionType, limits_for
from oneword.rate_limit.exceptions import RateLimitExceeded

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


class RateLimiter:
    """Allows at most max_actions occurrences in any trailing window of window_ms.

    This is an advisory guard, not a security boundary. Instances are meant
    to be created by the element that owns them and dropped with it; nothing
    is shared or persisted.
    """

    def __init__(
        self,
        max_actions: int,
        window_ms: int,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_actions: Maximum allowed actions per window. Must be positive.
            window_ms: Window length in milliseconds. Must be positive.
            clock: Callable returning the current time in milliseconds.
                Defaults to the monotonic clock.

        Raises:
            ValueError: If max_actions or window_ms is not positive.
        """
        if max_actions < 1:
            raise ValueError("max_actions must be a positive integer")
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")

        self.max_actions = max_actions
        self.window_ms = window_ms
        self._clock = clock or monotonic_ms
        self._timestamps: deque[float] = deque()

    @classmethod
    def for_action(
        cls,
        action_type: ActionType,
        settings: Settings,
        clock: Clock | None = None,
    ) -> "RateLimiter":
        """Create a fresh limiter configured for an action type.

        Args:
            action_type: The guarded action.
            settings: Settings holding the per-action limits.
            clock: Optional clock override.

        Returns:
            A new RateLimiter owned by the caller.
        """
        max_actions, window_ms = limits_for(action_type, settings)
        return cls(max_actions, window_ms, clock=clock)

    def _evict(self, now: float) -> None:
        cutoff = now - self.window_ms
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    def check(self) -> bool:
        """Record an action if a slot is free.

        A denied check leaves the retained timestamps untouched.

        Returns:
            True if the action is allowed, False if rate-limited.
        """
        now = self._clock()
        self._evict(now)
        if len(self._timestamps) >= self.max_actions:
            return False
        self._timestamps.append(now)
        return True

    def retry_after(self) -> int:
        """Seconds until the next action is allowed.

        Returns:
            0 if an action is allowed now, otherwise the whole seconds
            (rounded up) until the oldest retained action ages out.
        """
        now = self._clock()
        self._evict(now)
        if len(self._timestamps) < self.max_actions:
            return 0
        return math.ceil((self._timestamps[0] + self.window_ms - now) / 1000)

    def remaining(self) -> int:
        """Number of actions still allowed in the current window."""
        self._evict(self._clock())
        return self.max_actions - len(self._timestamps)

    def ensure_allowed(self) -> None:
        """Record an action or raise if the limit is reached.

        Raises:
            RateLimitExceeded: If check() denies the action.
        """
        if not self.check():
            wait = self.retry_after()
            raise RateLimitExceeded(f"Slow down. Try again in {wait}s.", retry_after=wait)
