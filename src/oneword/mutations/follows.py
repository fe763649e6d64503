# ABOUTME: Follow toggle for a profile with optimistic follower counts.
# ABOUTME: Flips the follow edge locally, writes it remotely, and restores the pair on failure.

from dataclasses import dataclass, replace

from oneword.backend.protocol import DataStore
from oneword.mutations.optimistic import InFlightGuard, run_optimistic
from oneword.mutations.results import MutationResult
from oneword.notifications import NotificationService
from oneword.rate_limit.service import RateLimiter


@dataclass(frozen=True)
class FollowState:
    """Whether the viewer follows a profile, and that profile's follower count."""

    is_following: bool
    follower_count: int


class FollowToggle:
    """Follow button for one profile, owned by the element showing that profile."""

    def __init__(
        self,
        follower_id: str,
        following_id: str,
        store: DataStore,
        state: FollowState,
        limiter: RateLimiter | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        """Initialize the toggle.

        Args:
            follower_id: The signed-in viewer.
            following_id: The profile being followed or unfollowed.
            store: Data store holding the follows table.
            state: Initial follow state loaded with the profile.
            limiter: Rate limiter for follow toggles.
            notifications: Service used to notify newly followed users.

        Raises:
            ValueError: If a user tries to follow themselves.
        """
        if follower_id == following_id:
            raise ValueError("Users cannot follow themselves")
        self.follower_id = follower_id
        self.following_id = following_id
        self.state = state
        self._store = store
        self._limiter = limiter
        self._notifications = notifications
        self._guard = InFlightGuard()

    @property
    def in_flight(self) -> bool:
        """True while a follow write is pending."""
        return self._guard.busy

    def _restore(self, snapshot: FollowState) -> None:
        self.state = snapshot

    def _apply(self) -> None:
        delta = -1 if self.state.is_following else 1
        self.state = FollowState(
            is_following=not self.state.is_following,
            follower_count=max(0, self.state.follower_count + delta),
        )

    def _already_following(self, snapshot: FollowState) -> None:
        # The edge existed, so the count loaded with the profile already included it.
        self.state = replace(snapshot, is_following=True)

    async def _remote(self, was_following: bool) -> None:
        edge = {"follower_id": self.follower_id, "following_id": self.following_id}
        if was_following:
            await self._store.delete("follows", edge)
            return

        await self._store.insert("follows", edge)
        if self._notifications is not None:
            self._notifications.dispatch(
                self._notifications.notify_follow(self.following_id, self.follower_id)
            )

    async def toggle(self) -> MutationResult:
        """Follow if not following, unfollow otherwise.

        Returns:
            MutationResult; state is restored when status is ROLLED_BACK.
        """
        was_following = self.state.is_following
        return await run_optimistic(
            self._guard,
            capture=lambda: self.state,
            apply=self._apply,
            remote=lambda: self._remote(was_following),
            restore=self._restore,
            limiter=self._limiter,
            on_duplicate=self._already_following,
            failure_message="Couldn't update follow. Try again.",
        )
