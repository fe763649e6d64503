# ABOUTME: Tests for profile editing.
# ABOUTME: Covers display name updates and validated avatar uploads with cache-busting URLs.

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from oneword.backend import LocalDataStore, LocalObjectStorage
from oneword.backend.exceptions import StorageError
from oneword.database import DatabaseService
from oneword.models import Profile
from oneword.profiles import ProfileEditor
from oneword.profiles.service import ProfileUpdateError


@pytest.fixture
def editor(store: LocalDataStore, alice: Profile, tmp_path: Path) -> ProfileEditor:
    """An editor for alice with avatars stored under tmp_path."""
    return ProfileEditor(alice.id, store, LocalObjectStorage(tmp_path / "avatars"))


class TestDisplayName:
    """Tests for update_display_name."""

    @pytest.mark.asyncio
    async def test_sets_trimmed_name(self, editor: ProfileEditor) -> None:
        """Names are trimmed."""
        row = await editor.update_display_name("  Alice A.  ")
        assert row["display_name"] == "Alice A."

    @pytest.mark.asyncio
    async def test_blank_clears(self, editor: ProfileEditor, db_service: DatabaseService) -> None:
        """A blank name clears the display name."""
        await editor.update_display_name("Alice")
        row = await editor.update_display_name("   ")

        assert row["display_name"] is None
        profile = db_service.get_profile(editor.user_id)
        assert profile is not None and profile.display_name is None

    @pytest.mark.asyncio
    async def test_missing_profile(self, store: LocalDataStore, tmp_path: Path) -> None:
        """Editing a profile that does not exist fails."""
        editor = ProfileEditor("ghost", store, LocalObjectStorage(tmp_path))
        with pytest.raises(ProfileUpdateError, match="Profile not found."):
            await editor.update_display_name("Ghost")


class TestAvatarUpload:
    """Tests for upload_avatar."""

    @pytest.mark.asyncio
    async def test_upload_saves_url(
        self, editor: ProfileEditor, db_service: DatabaseService, tmp_path: Path
    ) -> None:
        """The image is stored per user and the profile points at it."""
        url = await editor.upload_avatar("me.PNG", b"\x89PNG", "image/png")

        stored = tmp_path / "avatars" / editor.user_id / "avatar.png"
        assert stored.read_bytes() == b"\x89PNG"
        assert url.startswith("file://")
        assert "?t=" in url
        profile = db_service.get_profile(editor.user_id)
        assert profile is not None and profile.avatar_url == url

    @pytest.mark.asyncio
    async def test_reupload_overwrites(self, editor: ProfileEditor, tmp_path: Path) -> None:
        """Uploading again replaces the previous avatar."""
        await editor.upload_avatar("a.png", b"one", "image/png")
        await editor.upload_avatar("b.png", b"two", "image/png")

        assert (tmp_path / "avatars" / editor.user_id / "avatar.png").read_bytes() == b"two"

    @pytest.mark.asyncio
    async def test_rejects_large_file(self, store: LocalDataStore, alice: Profile) -> None:
        """Files over the configured size are refused before upload."""
        storage = AsyncMock()
        editor = ProfileEditor(alice.id, store, storage, max_avatar_bytes=10)

        with pytest.raises(ProfileUpdateError, match="Image must be under 1MB."):
            await editor.upload_avatar("big.png", b"x" * 11, "image/png")
        storage.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_non_image(self, editor: ProfileEditor) -> None:
        """Only images are accepted."""
        with pytest.raises(ProfileUpdateError, match="File must be an image."):
            await editor.upload_avatar("notes.txt", b"hi", "text/plain")

    @pytest.mark.asyncio
    async def test_storage_failure_surfaces_message(
        self, store: LocalDataStore, alice: Profile, db_service: DatabaseService
    ) -> None:
        """Upload errors are reported with the storage message and nothing is saved."""
        storage = AsyncMock()
        storage.upload.side_effect = StorageError("bucket not found")
        editor = ProfileEditor(alice.id, store, storage)

        with pytest.raises(ProfileUpdateError, match="bucket not found"):
            await editor.upload_avatar("me.png", b"x", "image/png")

        profile = db_service.get_profile(alice.id)
        assert profile is not None and profile.avatar_url is None
