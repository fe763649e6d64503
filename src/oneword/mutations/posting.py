# ABOUTME: Daily word posting flow: rate limit, validate, insert, then find matching words.
# ABOUTME: A unique violation means the user already answered today's prompt.

import logging

from oneword.backend.exceptions import DataStoreError
from oneword.backend.protocol import DataStore
from oneword.mutations.optimistic import InFlightGuard
from oneword.mutations.results import MutationResult, MutationStatus
from oneword.rate_limit.service import RateLimiter
from oneword.validation.word import normalize_word, validate_word

logger = logging.getLogger(__name__)

ALREADY_POSTED_MESSAGE = "You already posted today."


class PostWordFlow:
    """Post box for one user and one prompt."""

    def __init__(
        self,
        user_id: str,
        prompt_id: str | None,
        store: DataStore,
        limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the flow.

        Args:
            user_id: Author of the word.
            prompt_id: Prompt being answered, or None when no prompt is active.
            store: Data store holding words and profiles.
            limiter: Rate limiter for posting.
        """
        self.user_id = user_id
        self.prompt_id = prompt_id
        self.posted_word: str | None = None
        self.connections: list[str] = []
        self._store = store
        self._limiter = limiter
        self._guard = InFlightGuard()

    @property
    def in_flight(self) -> bool:
        """True while the insert is pending."""
        return self._guard.busy

    async def submit(self, raw: str) -> MutationResult:
        """Post a word.

        Args:
            raw: The text typed by the user.

        Returns:
            MutationResult. On COMMITTED, posted_word holds the stored word
            and connections the usernames who said the same word.
        """
        if self._guard.busy:
            return MutationResult(MutationStatus.SKIPPED)
        if self._limiter is not None and not self._limiter.check():
            return MutationResult.rate_limited(self._limiter.retry_after())

        error = validate_word(raw)
        if error is not None:
            return MutationResult(MutationStatus.INVALID, message=error.message)

        word = normalize_word(raw)
        self._guard.try_acquire()
        try:
            await self._store.insert(
                "words",
                {"user_id": self.user_id, "word": word, "prompt_id": self.prompt_id},
            )
        except DataStoreError as e:
            if e.is_unique_violation:
                return MutationResult(MutationStatus.ALREADY_DONE, message=ALREADY_POSTED_MESSAGE)
            logger.warning("Posting %r failed: %s", word, e)
            return MutationResult(MutationStatus.FAILED, message=str(e), error=e)
        finally:
            self._guard.release()

        self.posted_word = word
        self.connections = await self.find_connections(word)
        return MutationResult(MutationStatus.COMMITTED)

    async def find_connections(self, word: str) -> list[str]:
        """Usernames of other users who answered the same prompt with the same word.

        The match is case-insensitive. A freshly committed row may not be
        visible yet, so an empty or partial list is a normal outcome and
        lookup failures are reported as an empty list.
        """
        filters = {"prompt_id": self.prompt_id} if self.prompt_id is not None else None
        try:
            rows = await self._store.select("words", filters, ilike={"word": word})
            author_ids = sorted({row["user_id"] for row in rows if row["user_id"] != self.user_id})
            if not author_ids:
                return []
            profiles = await self._store.select("profiles", {"id": author_ids})
        except DataStoreError as e:
            logger.debug("Connection lookup for %r failed: %s", word, e)
            return []
        return sorted(profile["username"] for profile in profiles)
