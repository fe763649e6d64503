# ABOUTME: Database service for managing SQLite connections and feed queries.
# ABOUTME: Provides session management, typed lookups, and the streak bookkeeping done on each post.

from collections.abc import Generator, Sequence
from contextlib import contextmanager
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlmodel import Session, SQLModel, col, create_engine, func, select

from oneword.models import Follow, Notification, Profile, Prompt, Reaction, Word


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseService:
    """Service for managing database connections and operations."""

    DEFAULT_DB_PATH = Path.home() / ".oneword" / "data.db"

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file. Defaults to ~/.oneword/data.db
        """
        self.db_path = db_path if db_path is not None else self.DEFAULT_DB_PATH
        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

    @property
    def engine(self) -> Any:
        """The underlying SQLAlchemy engine."""
        return self._engine

    def init_db(self) -> None:
        """Initialize the database by creating tables and parent directories."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self._engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session as a context manager.

        Yields:
            SQLModel Session for database operations.
        """
        with Session(self._engine) as session:
            yield session

    def save_profile(self, profile: Profile) -> Profile:
        """Save a profile to the database.

        Args:
            profile: The Profile to save.

        Returns:
            The saved Profile with defaults populated.
        """
        with self.get_session() as session:
            session.add(profile)
            session.commit()
            session.refresh(profile)
            return profile

    def get_profile(self, user_id: str) -> Profile | None:
        """Retrieve a profile by id."""
        with self.get_session() as session:
            return session.get(Profile, user_id)

    def get_profile_by_username(self, username: str) -> Profile | None:
        """Retrieve a profile by its username.

        Args:
            username: The username to search for.

        Returns:
            The Profile if found, None otherwise.
        """
        with self.get_session() as session:
            statement = select(Profile).where(Profile.username == username)
            return session.exec(statement).first()

    def get_or_create_profile(self, username: str) -> Profile:
        """Return the profile for a username, creating it on first sign-in."""
        existing = self.get_profile_by_username(username)
        if existing is not None:
            return existing
        return self.save_profile(Profile(username=username))

    def get_profiles(self, user_ids: Sequence[str]) -> dict[str, Profile]:
        """Retrieve several profiles keyed by id."""
        if not user_ids:
            return {}
        with self.get_session() as session:
            statement = select(Profile).where(col(Profile.id).in_(list(user_ids)))
            return {profile.id: profile for profile in session.exec(statement).all()}

    def get_prompt_for_date(self, day: date) -> Prompt | None:
        """Retrieve the prompt active on a given date."""
        with self.get_session() as session:
            statement = select(Prompt).where(Prompt.active_date == day)
            return session.exec(statement).first()

    def get_prompts(self, limit: int = 100) -> list[Prompt]:
        """Retrieve prompts, newest active date first."""
        with self.get_session() as session:
            statement = select(Prompt).order_by(col(Prompt.active_date).desc()).limit(limit)
            return list(session.exec(statement).all())

    def get_recent_words(
        self,
        limit: int = 50,
        user_ids: Sequence[str] | None = None,
        prompt_id: str | None = None,
    ) -> list[Word]:
        """Retrieve the most recent words.

        Args:
            limit: Maximum number of words to return.
            user_ids: If given, only words by these authors.
            prompt_id: If given, only words answering this prompt.

        Returns:
            List of Word objects, newest first.
        """
        with self.get_session() as session:
            statement = select(Word)
            if user_ids is not None:
                statement = statement.where(col(Word.user_id).in_(list(user_ids)))
            if prompt_id is not None:
                statement = statement.where(Word.prompt_id == prompt_id)
            statement = statement.order_by(col(Word.created_at).desc()).limit(limit)
            return list(session.exec(statement).all())

    def find_words_by_id_prefix(self, prefix: str) -> list[Word]:
        """Retrieve words whose id starts with prefix (ids are shown shortened)."""
        with self.get_session() as session:
            statement = select(Word).where(col(Word.id).startswith(prefix)).limit(2)
            return list(session.exec(statement).all())

    def find_prompts_by_id_prefix(self, prefix: str) -> list[Prompt]:
        """Retrieve prompts whose id starts with prefix (ids are shown shortened)."""
        with self.get_session() as session:
            statement = select(Prompt).where(col(Prompt.id).startswith(prefix)).limit(2)
            return list(session.exec(statement).all())

    def get_user_word_for_prompt(self, user_id: str, prompt_id: str) -> Word | None:
        """Retrieve a user's answer to a prompt, if they posted one."""
        with self.get_session() as session:
            statement = select(Word).where(Word.user_id == user_id, Word.prompt_id == prompt_id)
            return session.exec(statement).first()

    def get_reactions_for_words(self, word_ids: Sequence[str]) -> list[Reaction]:
        """Retrieve all reactions attached to the given words."""
        if not word_ids:
            return []
        with self.get_session() as session:
            statement = select(Reaction).where(col(Reaction.word_id).in_(list(word_ids)))
            return list(session.exec(statement).all())

    def is_following(self, follower_id: str, following_id: str) -> bool:
        """Check whether a follow edge exists."""
        with self.get_session() as session:
            statement = select(Follow).where(
                Follow.follower_id == follower_id, Follow.following_id == following_id
            )
            return session.exec(statement).first() is not None

    def get_following_ids(self, user_id: str) -> list[str]:
        """Ids of every user that user_id follows."""
        with self.get_session() as session:
            statement = select(Follow.following_id).where(Follow.follower_id == user_id)
            return list(session.exec(statement).all())

    def count_followers(self, user_id: str) -> int:
        """Number of users following user_id."""
        with self.get_session() as session:
            statement = (
                select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
            )
            return session.exec(statement).one()

    def count_following(self, user_id: str) -> int:
        """Number of users user_id follows."""
        with self.get_session() as session:
            statement = (
                select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
            )
            return session.exec(statement).one()

    def count_words(self, user_id: str) -> int:
        """Number of words user_id has posted."""
        with self.get_session() as session:
            statement = select(func.count()).select_from(Word).where(Word.user_id == user_id)
            return session.exec(statement).one()

    def count_words_by_prompt(self, prompt_ids: Sequence[str]) -> dict[str, int]:
        """Number of answers per prompt id; prompts without answers are omitted."""
        if not prompt_ids:
            return {}
        with self.get_session() as session:
            statement = (
                select(Word.prompt_id, func.count())
                .where(col(Word.prompt_id).in_(list(prompt_ids)))
                .group_by(Word.prompt_id)  # type: ignore[arg-type]
            )
            return {prompt_id: count for prompt_id, count in session.exec(statement).all()}

    def count_unread_notifications(self, user_id: str) -> int:
        """Number of unread notifications for user_id."""
        with self.get_session() as session:
            statement = (
                select(func.count())
                .select_from(Notification)
                .where(Notification.user_id == user_id, col(Notification.read).is_(False))
            )
            return session.exec(statement).one()

    def update_streak(self, session: Session, user_id: str, posted_on: date) -> None:
        """Advance a user's posting streak for a post made on posted_on.

        Runs inside the caller's session so it commits together with the
        word insert that triggered it.

        Args:
            session: Open session the word was inserted with.
            user_id: Author of the new word.
            posted_on: Calendar day of the post.
        """
        profile = session.get(Profile, user_id)
        if profile is None or profile.last_post_date == posted_on:
            return

        if profile.last_post_date == posted_on - timedelta(days=1):
            profile.current_streak += 1
        else:
            profile.current_streak = 1
        profile.longest_streak = max(profile.longest_streak, profile.current_streak)
        profile.last_post_date = posted_on
        session.add(profile)
