# ABOUTME: Profile editing: display name updates and avatar uploads.
# ABOUTME: Avatars are validated, stored per user, and linked with a cache-busting URL.

import time

from oneword.backend.exceptions import DataStoreError, StorageError
from oneword.backend.protocol import DataStore, ObjectStorage, Row
from oneword.errors import OneWordError
from oneword.validation.avatar import (
    DEFAULT_MAX_AVATAR_BYTES,
    avatar_storage_path,
    validate_avatar,
)


class ProfileUpdateError(OneWordError):
    """A profile change was rejected; the message is shown inline."""

    pass


class ProfileEditor:
    """Edits one user's own profile."""

    def __init__(
        self,
        user_id: str,
        store: DataStore,
        storage: ObjectStorage,
        max_avatar_bytes: int = DEFAULT_MAX_AVATAR_BYTES,
    ) -> None:
        """Initialize the editor.

        Args:
            user_id: Owner of the profile.
            store: Data store holding profiles.
            storage: Object storage for avatars.
            max_avatar_bytes: Largest accepted avatar size.
        """
        self.user_id = user_id
        self._store = store
        self._storage = storage
        self._max_avatar_bytes = max_avatar_bytes

    async def _save(self, values: Row) -> Row:
        try:
            rows = await self._store.update("profiles", values, {"id": self.user_id})
        except DataStoreError as e:
            raise ProfileUpdateError(str(e)) from e
        if not rows:
            raise ProfileUpdateError("Profile not found.")
        return rows[0]

    async def update_display_name(self, name: str) -> Row:
        """Set the display name; a blank name clears it.

        Raises:
            ProfileUpdateError: If the update is rejected.
        """
        return await self._save({"display_name": name.strip() or None})

    async def upload_avatar(self, filename: str, data: bytes, content_type: str) -> str:
        """Upload a new avatar and point the profile at it.

        Args:
            filename: Original filename, used for the extension.
            data: Image bytes.
            content_type: MIME type of the image.

        Returns:
            The avatar URL saved on the profile.

        Raises:
            ProfileUpdateError: If validation, upload, or the profile update fails.
        """
        error = validate_avatar(len(data), content_type, self._max_avatar_bytes)
        if error is not None:
            raise ProfileUpdateError(error)

        path = avatar_storage_path(self.user_id, filename)
        try:
            await self._storage.upload(path, data, upsert=True)
        except StorageError as e:
            raise ProfileUpdateError(str(e)) from e

        url = f"{self._storage.public_url(path)}?t={int(time.time() * 1000)}"
        await self._save({"avatar_url": url})
        return url
