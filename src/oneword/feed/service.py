# ABOUTME: Read side of the feed: recent words with authors, reaction counts, and own reactions.
# ABOUTME: Also builds profile views with follower counts for the follow control.

from collections import defaultdict
from dataclasses import dataclass, field

from oneword.database import DatabaseService
from oneword.models import Profile, Word
from oneword.mutations.follows import FollowState
from oneword.mutations.reactions import ReactionState


@dataclass
class FeedItem:
    """One word as shown in a feed."""

    word: Word
    author: Profile | None
    reaction_counts: dict[str, int] = field(default_factory=dict)
    user_reaction: str | None = None

    @property
    def author_name(self) -> str:
        """Author username, or "anonymous" if the profile is missing."""
        return self.author.username if self.author is not None else "anonymous"

    def reaction_state(self) -> ReactionState:
        """Initial state for a ReactionToggle on this item."""
        return ReactionState(counts=dict(self.reaction_counts), selected=self.user_reaction)


@dataclass
class ProfileView:
    """A profile page: the profile, its counts, and its latest words."""

    profile: Profile
    follower_count: int
    following_count: int
    is_following: bool
    post_count: int = 0
    items: list[FeedItem] = field(default_factory=list)

    def follow_state(self) -> FollowState:
        """Initial state for a FollowToggle on this profile."""
        return FollowState(is_following=self.is_following, follower_count=self.follower_count)


class FeedService:
    """Builds feed and profile read models from the database."""

    def __init__(self, db_service: DatabaseService) -> None:
        """Initialize the feed service.

        Args:
            db_service: Database to read from.
        """
        self._db_service = db_service

    def build_items(self, words: list[Word], viewer_id: str | None) -> list[FeedItem]:
        """Attach authors, reaction counts, and the viewer's own reaction to words."""
        word_ids = [word.id for word in words]
        reactions = self._db_service.get_reactions_for_words(word_ids)
        authors = self._db_service.get_profiles(sorted({word.user_id for word in words}))

        counts: dict[str, dict[str, int]] = defaultdict(dict)
        own: dict[str, str] = {}
        for reaction in reactions:
            per_word = counts[reaction.word_id]
            per_word[reaction.emoji] = per_word.get(reaction.emoji, 0) + 1
            if viewer_id is not None and reaction.user_id == viewer_id:
                own[reaction.word_id] = reaction.emoji

        return [
            FeedItem(
                word=word,
                author=authors.get(word.user_id),
                reaction_counts=counts.get(word.id, {}),
                user_reaction=own.get(word.id),
            )
            for word in words
        ]

    def get_feed(
        self,
        viewer_id: str | None = None,
        following_only: bool = False,
        prompt_id: str | None = None,
        limit: int = 50,
    ) -> list[FeedItem]:
        """Latest words, newest first.

        Args:
            viewer_id: Signed-in viewer, used to mark their own reactions.
            following_only: Only include authors the viewer follows.
            prompt_id: Only include answers to this prompt.
            limit: Maximum number of words.

        Returns:
            List of FeedItem objects.
        """
        user_ids: list[str] | None = None
        if following_only and viewer_id is not None:
            user_ids = self._db_service.get_following_ids(viewer_id)

        words = self._db_service.get_recent_words(
            limit=limit, user_ids=user_ids, prompt_id=prompt_id
        )
        return self.build_items(words, viewer_id)

    def get_profile_view(
        self,
        username: str,
        viewer_id: str | None = None,
        limit: int = 50,
    ) -> ProfileView | None:
        """Profile page for a username, or None if there is no such user."""
        profile = self._db_service.get_profile_by_username(username)
        if profile is None:
            return None

        is_following = False
        if viewer_id is not None and viewer_id != profile.id:
            is_following = self._db_service.is_following(viewer_id, profile.id)

        words = self._db_service.get_recent_words(limit=limit, user_ids=[profile.id])
        return ProfileView(
            profile=profile,
            follower_count=self._db_service.count_followers(profile.id),
            following_count=self._db_service.count_following(profile.id),
            is_following=is_following,
            post_count=self._db_service.count_words(profile.id),
            items=self.build_items(words, viewer_id),
        )
