# ABOUTME: Tests for the SQLite DataStore and the filesystem object storage.
# ABOUTME: Covers CRUD calls, constraint error codes, ilike matching, streaks, and worker threads.

import threading
from contextlib import contextmanager
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

import pytest

from oneword.backend import LocalDataStore, LocalObjectStorage
from oneword.backend.exceptions import (
    FOREIGN_KEY_VIOLATION,
    INVALID_INPUT,
    UNDEFINED_COLUMN,
    UNDEFINED_TABLE,
    UNIQUE_VIOLATION,
    DataStoreError,
    StorageError,
)
from oneword.database import DatabaseService
from oneword.models import Profile, Prompt, Word


class TestInsert:
    """Tests for LocalDataStore.insert."""

    @pytest.mark.asyncio
    async def test_returns_row_with_generated_columns(self, store: LocalDataStore) -> None:
        """Inserted rows come back with id and defaults."""
        row = await store.insert("profiles", {"username": "carol"})

        assert row["username"] == "carol"
        assert row["id"]
        assert row["current_streak"] == 0
        assert row["is_admin"] is False

    @pytest.mark.asyncio
    async def test_unique_violation_code(self, store: LocalDataStore, alice: Profile) -> None:
        """Duplicate usernames raise with code 23505."""
        with pytest.raises(DataStoreError) as exc_info:
            await store.insert("profiles", {"username": "alice"})

        assert exc_info.value.code == UNIQUE_VIOLATION
        assert exc_info.value.is_unique_violation

    @pytest.mark.asyncio
    async def test_foreign_key_violation_code(self, store: LocalDataStore) -> None:
        """A follow edge between missing profiles raises with code 23503."""
        with pytest.raises(DataStoreError) as exc_info:
            await store.insert("follows", {"follower_id": "nobody", "following_id": "ghost"})

        assert exc_info.value.code == FOREIGN_KEY_VIOLATION

    @pytest.mark.asyncio
    async def test_unknown_table(self, store: LocalDataStore) -> None:
        """Unknown tables raise with code 42P01."""
        with pytest.raises(DataStoreError) as exc_info:
            await store.insert("likes", {})

        assert exc_info.value.code == UNDEFINED_TABLE

    @pytest.mark.asyncio
    async def test_unknown_column(self, store: LocalDataStore) -> None:
        """Unknown columns raise with code 42703."""
        with pytest.raises(DataStoreError) as exc_info:
            await store.insert("profiles", {"username": "carol", "karma": 3})

        assert exc_info.value.code == UNDEFINED_COLUMN

    @pytest.mark.asyncio
    async def test_invalid_value(self, store: LocalDataStore, alice: Profile) -> None:
        """Values failing model validation raise with code 22P02."""
        with pytest.raises(DataStoreError) as exc_info:
            await store.insert("words", {"user_id": alice.id, "word": "hi", "created_at": "soon"})

        assert exc_info.value.code == INVALID_INPUT


class TestSelectUpdateDelete:
    """Tests for the read and write helpers."""

    @pytest.mark.asyncio
    async def test_select_with_filters_and_order(
        self, store: LocalDataStore, alice: Profile, bob: Profile
    ) -> None:
        """Equality filters, list filters, ordering, and limits combine."""
        rows = await store.select(
            "profiles", {"id": [alice.id, bob.id]}, order_by="username", descending=True
        )
        assert [row["username"] for row in rows] == ["bob", "alice"]

        limited = await store.select("profiles", order_by="username", limit=1)
        assert [row["username"] for row in limited] == ["alice"]

    @pytest.mark.asyncio
    async def test_select_none_filter(self, store: LocalDataStore, alice: Profile) -> None:
        """A None filter matches NULL columns."""
        rows = await store.select("profiles", {"display_name": None})
        assert [row["username"] for row in rows] == ["alice"]

    @pytest.mark.asyncio
    async def test_select_ilike(self, store: LocalDataStore, bob_word: Word) -> None:
        """ilike compares case-insensitively."""
        rows = await store.select("words", ilike={"word": "CaLm"})
        assert [row["id"] for row in rows] == [bob_word.id]

    @pytest.mark.asyncio
    async def test_update_returns_changed_rows(self, store: LocalDataStore, alice: Profile) -> None:
        """update sets columns and returns the rows."""
        rows = await store.update("profiles", {"display_name": "Alice"}, {"id": alice.id})

        assert len(rows) == 1
        assert rows[0]["display_name"] == "Alice"

    @pytest.mark.asyncio
    async def test_update_without_match(self, store: LocalDataStore) -> None:
        """No matching rows returns an empty list."""
        assert await store.update("profiles", {"display_name": "x"}, {"id": "missing"}) == []

    @pytest.mark.asyncio
    async def test_delete_returns_count(
        self, store: LocalDataStore, db_service: DatabaseService, bob_word: Word
    ) -> None:
        """delete reports how many rows it removed."""
        assert await store.delete("words", {"id": bob_word.id, "user_id": bob_word.user_id}) == 1
        assert await store.delete("words", {"id": bob_word.id}) == 0
        assert db_service.find_words_by_id_prefix(bob_word.id) == []


class TestStreaks:
    """Tests for the streak bookkeeping done on word insert."""

    @pytest.mark.asyncio
    async def test_first_post_starts_streak(
        self, store: LocalDataStore, db_service: DatabaseService, alice: Profile, prompt: Prompt
    ) -> None:
        """The first post sets both streaks to 1."""
        await store.insert("words", {"user_id": alice.id, "word": "hi", "prompt_id": prompt.id})

        profile = db_service.get_profile(alice.id)
        assert profile is not None
        assert profile.current_streak == 1
        assert profile.longest_streak == 1
        assert profile.last_post_date is not None

    def test_consecutive_days_extend_and_gaps_reset(
        self, db_service: DatabaseService, alice: Profile
    ) -> None:
        """update_streak counts consecutive days and resets after a gap."""
        start = date(2024, 1, 1)
        with db_service.get_session() as session:
            for offset in (0, 1, 1, 2, 5):
                db_service.update_streak(session, alice.id, start + timedelta(days=offset))
            session.commit()

        profile = db_service.get_profile(alice.id)
        assert profile is not None
        assert profile.current_streak == 1
        assert profile.longest_streak == 3
        assert profile.last_post_date == start + timedelta(days=5)

    @pytest.mark.asyncio
    async def test_failed_insert_leaves_streak(
        self, store: LocalDataStore, db_service: DatabaseService, alice: Profile, prompt: Prompt
    ) -> None:
        """A rejected duplicate post does not touch the streak."""
        values = {"user_id": alice.id, "word": "hi", "prompt_id": prompt.id}
        await store.insert("words", values)
        with pytest.raises(DataStoreError):
            await store.insert("words", values)

        profile = db_service.get_profile(alice.id)
        assert profile is not None
        assert profile.current_streak == 1


class TestThreading:
    """Tests for running session work outside the event loop."""

    @pytest.mark.asyncio
    async def test_session_work_runs_in_worker_thread(
        self, store: LocalDataStore, db_service: DatabaseService, alice: Profile
    ) -> None:
        """Sessions are opened off the event loop thread and results still come back."""
        seen: list[int] = []
        original = db_service.get_session

        @contextmanager
        def recording_session():
            seen.append(threading.get_ident())
            with original() as session:
                yield session

        with mock.patch.object(db_service, "get_session", recording_session):
            rows = await store.select("profiles", {"id": alice.id})
            await store.update("profiles", {"display_name": "Al"}, {"id": alice.id})

        assert [row["username"] for row in rows] == ["alice"]
        assert len(seen) == 2
        assert threading.get_ident() not in seen
        assert db_service.get_profile(alice.id).display_name == "Al"


class TestLocalObjectStorage:
    """Tests for LocalObjectStorage."""

    @pytest.mark.asyncio
    async def test_upload_and_url(self, tmp_path: Path) -> None:
        """Uploads land below the root and are served as file URLs."""
        storage = LocalObjectStorage(tmp_path)

        await storage.upload("u1/avatar.png", b"png")

        assert (tmp_path / "u1" / "avatar.png").read_bytes() == b"png"
        assert storage.public_url("u1/avatar.png").startswith("file://")

    @pytest.mark.asyncio
    async def test_existing_object_needs_upsert(self, tmp_path: Path) -> None:
        """Overwriting requires upsert."""
        storage = LocalObjectStorage(tmp_path)
        await storage.upload("u1/avatar.png", b"one")

        with pytest.raises(StorageError):
            await storage.upload("u1/avatar.png", b"two")

        await storage.upload("u1/avatar.png", b"two", upsert=True)
        assert (tmp_path / "u1" / "avatar.png").read_bytes() == b"two"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/etc/passwd", "../escape.png", "u1/../../x", ""])
    async def test_rejects_paths_outside_root(self, tmp_path: Path, path: str) -> None:
        """Absolute and parent-relative paths are refused."""
        with pytest.raises(StorageError):
            await LocalObjectStorage(tmp_path).upload(path, b"x")
