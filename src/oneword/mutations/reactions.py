# ABOUTME: Reaction toggle for a single word with optimistic counts.
# ABOUTME: Selecting, switching, or clearing an emoji updates counts at once; failures roll back.

from dataclasses import dataclass, field

from oneword.backend.protocol import DataStore
from oneword.models import REACTION_EMOJIS
from oneword.mutations.optimistic import InFlightGuard, run_optimistic
from oneword.mutations.results import MutationResult, MutationStatus
from oneword.notifications import NotificationService
from oneword.rate_limit.service import RateLimiter


@dataclass
class ReactionState:
    """Reaction counts shown on a word and the viewer's own selection."""

    counts: dict[str, int] = field(default_factory=dict)
    selected: str | None = None

    def copy(self) -> "ReactionState":
        """Independent copy usable as a rollback snapshot."""
        return ReactionState(counts=dict(self.counts), selected=self.selected)

    @property
    def total(self) -> int:
        """Sum of all emoji counts."""
        return sum(self.counts.values())


class ReactionToggle:
    """Reaction control for one word, owned by the element showing that word."""

    def __init__(
        self,
        word_id: str,
        user_id: str | None,
        store: DataStore,
        state: ReactionState | None = None,
        limiter: RateLimiter | None = None,
        author_id: str | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        """Initialize the toggle.

        Args:
            word_id: Word the reactions belong to.
            user_id: Viewer reacting, or None when signed out.
            store: Data store holding the reactions table.
            state: Initial counts and selection loaded with the feed.
            limiter: Rate limiter for reacting.
            author_id: Author of the word, notified about new reactions.
            notifications: Service used to notify the author.
        """
        self.word_id = word_id
        self.user_id = user_id
        self.state = state if state is not None else ReactionState()
        self._store = store
        self._limiter = limiter
        self._author_id = author_id
        self._notifications = notifications
        self._guard = InFlightGuard()

    @property
    def in_flight(self) -> bool:
        """True while a reaction write is pending."""
        return self._guard.busy

    def _restore(self, snapshot: ReactionState) -> None:
        self.state = snapshot

    def _apply(self, emoji: str, previous: str | None) -> None:
        counts = dict(self.state.counts)
        if previous is not None:
            counts[previous] = max(0, counts.get(previous, 0) - 1)
        if previous == emoji:
            self.state = ReactionState(counts=counts, selected=None)
        else:
            counts[emoji] = counts.get(emoji, 0) + 1
            self.state = ReactionState(counts=counts, selected=emoji)

    async def _remote(self, user_id: str, emoji: str, previous: str | None) -> None:
        own_row = {"word_id": self.word_id, "user_id": user_id}
        if previous is not None:
            await self._store.delete("reactions", own_row)
        if previous == emoji:
            return

        await self._store.insert("reactions", {**own_row, "emoji": emoji})
        if self._notifications is not None and self._author_id is not None:
            self._notifications.dispatch(
                self._notifications.notify_reaction(
                    self._author_id, user_id, self.word_id, emoji
                )
            )

    async def toggle(self, emoji: str) -> MutationResult:
        """React with emoji, or clear the reaction if emoji is already selected.

        Args:
            emoji: One of REACTION_EMOJIS.

        Returns:
            MutationResult; state is restored when status is ROLLED_BACK.

        Raises:
            ValueError: If emoji is not one of the supported reactions.
        """
        if emoji not in REACTION_EMOJIS:
            raise ValueError(f"Unsupported reaction: {emoji!r}")
        if self.user_id is None:
            return MutationResult(MutationStatus.SKIPPED, message="Sign in to react.")

        user_id = self.user_id
        previous = self.state.selected
        return await run_optimistic(
            self._guard,
            capture=self.state.copy,
            apply=lambda: self._apply(emoji, previous),
            remote=lambda: self._remote(user_id, emoji, previous),
            restore=self._restore,
            limiter=self._limiter,
            on_duplicate=lambda snapshot: None,
            failure_message="Couldn't save your reaction.",
        )
