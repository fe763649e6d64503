# ABOUTME: Tests for the database service module.
# ABOUTME: Covers profile, prompt, word, reaction, follow, and notification queries.

import tempfile
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

from sqlmodel import SQLModel

from oneword.database import DatabaseService
from oneword.models import Follow, Notification, NotificationType, Profile, Prompt, Reaction, Word


def add(db_service: DatabaseService, *rows: SQLModel) -> None:
    with db_service.get_session() as session:
        for row in rows:
            session.add(row)
        session.commit()
        for row in rows:
            session.refresh(row)


class TestDatabaseServiceInit:
    """Tests for DatabaseService initialization."""

    def test_init_with_custom_path(self, tmp_path: Path) -> None:
        """Test that DatabaseService accepts a custom database path."""
        service = DatabaseService(db_path=tmp_path / "x.db")
        assert service.db_path == tmp_path / "x.db"

    def test_init_with_default_path(self) -> None:
        """Test that DatabaseService uses default path when none provided."""
        service = DatabaseService()
        assert service.db_path == Path.home() / ".oneword" / "data.db"

    def test_init_db_creates_parent_directory(self) -> None:
        """Test that init_db creates parent directories if they don't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "subdir" / "nested" / "data.db"
            service = DatabaseService(db_path=db_path)
            service.init_db()
            assert db_path.parent.exists()
            assert service.get_prompts() == []


class TestProfiles:
    """Tests for profile lookups."""

    def test_get_or_create_profile_is_idempotent(self, db_service: DatabaseService) -> None:
        """The same username always maps to the same profile."""
        first = db_service.get_or_create_profile("carol")
        second = db_service.get_or_create_profile("carol")
        assert first.id == second.id

    def test_get_profile_by_username(self, db_service: DatabaseService, alice: Profile) -> None:
        """Profiles can be found by username."""
        found = db_service.get_profile_by_username("alice")
        assert found is not None
        assert found.id == alice.id
        assert db_service.get_profile_by_username("nobody") is None

    def test_get_profiles(self, db_service: DatabaseService, alice: Profile, bob: Profile) -> None:
        """get_profiles returns a map keyed by id."""
        profiles = db_service.get_profiles([alice.id, bob.id, "missing"])
        assert set(profiles) == {alice.id, bob.id}
        assert db_service.get_profiles([]) == {}

    def test_label_prefers_display_name(self) -> None:
        """Profile.label falls back to the username."""
        assert Profile(username="al").label == "al"
        assert Profile(username="al", display_name="Al").label == "Al"


class TestPrompts:
    """Tests for prompt lookups."""

    def test_prompt_for_date(self, db_service: DatabaseService, prompt: Prompt) -> None:
        """The prompt active on a date is found."""
        found = db_service.get_prompt_for_date(date(2024, 3, 1))
        assert found is not None
        assert found.id == prompt.id
        assert db_service.get_prompt_for_date(date(2024, 3, 2)) is None

    def test_prompts_newest_first(self, db_service: DatabaseService) -> None:
        """get_prompts orders by active date, newest first."""
        add(
            db_service,
            Prompt(question="old", active_date=date(2024, 1, 1)),
            Prompt(question="new", active_date=date(2024, 2, 1)),
        )
        assert [p.question for p in db_service.get_prompts()] == ["new", "old"]
        assert len(db_service.get_prompts(limit=1)) == 1

    def test_find_prompts_by_id_prefix(self, db_service: DatabaseService, prompt: Prompt) -> None:
        """Short ids shown in the prompt listing resolve to the prompt."""
        matches = db_service.find_prompts_by_id_prefix(prompt.id[:8])
        assert [p.id for p in matches] == [prompt.id]
        assert db_service.find_prompts_by_id_prefix("zzzz") == []


class TestWords:
    """Tests for word and reaction lookups."""

    def test_recent_words_filters(
        self, db_service: DatabaseService, alice: Profile, bob: Profile, prompt: Prompt
    ) -> None:
        """Words can be filtered by author and prompt, newest first."""
        now = datetime.now(UTC)
        add(
            db_service,
            Word(user_id=alice.id, word="old", created_at=now - timedelta(hours=2)),
            Word(
                user_id=bob.id,
                word="mid",
                prompt_id=prompt.id,
                created_at=now - timedelta(hours=1),
            ),
            Word(user_id=alice.id, word="new", created_at=now),
        )

        assert [w.word for w in db_service.get_recent_words()] == ["new", "mid", "old"]
        assert [w.word for w in db_service.get_recent_words(limit=1)] == ["new"]
        assert [w.word for w in db_service.get_recent_words(user_ids=[alice.id])] == ["new", "old"]
        assert [w.word for w in db_service.get_recent_words(prompt_id=prompt.id)] == ["mid"]
        assert db_service.get_recent_words(user_ids=[]) == []

    def test_find_words_by_id_prefix(self, db_service: DatabaseService, bob_word: Word) -> None:
        """Short ids shown in the feed resolve to the word."""
        matches = db_service.find_words_by_id_prefix(bob_word.id[:8])
        assert [w.id for w in matches] == [bob_word.id]

    def test_word_counts(
        self, db_service: DatabaseService, alice: Profile, bob: Profile, prompt: Prompt
    ) -> None:
        """Words are counted per author and per prompt."""
        add(
            db_service,
            Word(user_id=alice.id, word="calm", prompt_id=prompt.id),
            Word(user_id=bob.id, word="wild", prompt_id=prompt.id),
            Word(user_id=bob.id, word="loose"),
        )

        assert db_service.count_words(bob.id) == 2
        assert db_service.count_words(alice.id) == 1
        assert db_service.count_words_by_prompt([prompt.id, "unused"]) == {prompt.id: 2}
        assert db_service.count_words_by_prompt([]) == {}

    def test_user_word_for_prompt(
        self, db_service: DatabaseService, bob: Profile, alice: Profile, bob_word: Word
    ) -> None:
        """A user's answer to a prompt is found."""
        assert bob_word.prompt_id is not None
        found = db_service.get_user_word_for_prompt(bob.id, bob_word.prompt_id)
        assert found is not None and found.id == bob_word.id
        assert db_service.get_user_word_for_prompt(alice.id, bob_word.prompt_id) is None

    def test_reactions_for_words(
        self, db_service: DatabaseService, alice: Profile, bob_word: Word
    ) -> None:
        """Reactions are fetched for a set of words."""
        add(db_service, Reaction(word_id=bob_word.id, user_id=alice.id, emoji="🔥"))

        reactions = db_service.get_reactions_for_words([bob_word.id])
        assert [r.emoji for r in reactions] == ["🔥"]
        assert db_service.get_reactions_for_words([]) == []


class TestFollows:
    """Tests for follow counts."""

    def test_follow_queries(
        self, db_service: DatabaseService, alice: Profile, bob: Profile
    ) -> None:
        """Follow edges are directed."""
        add(db_service, Follow(follower_id=alice.id, following_id=bob.id))

        assert db_service.is_following(alice.id, bob.id) is True
        assert db_service.is_following(bob.id, alice.id) is False
        assert db_service.get_following_ids(alice.id) == [bob.id]
        assert db_service.count_followers(bob.id) == 1
        assert db_service.count_following(alice.id) == 1
        assert db_service.count_followers(alice.id) == 0


class TestNotifications:
    """Tests for notification counts."""

    def test_count_unread(self, db_service: DatabaseService, alice: Profile, bob: Profile) -> None:
        """Only unread notifications are counted."""
        add(
            db_service,
            Notification(user_id=alice.id, actor_id=bob.id, type=NotificationType.FOLLOW),
            Notification(
                user_id=alice.id, actor_id=bob.id, type=NotificationType.FOLLOW, read=True
            ),
        )
        assert db_service.count_unread_notifications(alice.id) == 1
        assert db_service.count_unread_notifications(bob.id) == 0
