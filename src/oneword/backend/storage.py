# ABOUTME: Filesystem-backed object storage used for avatars when running locally.
# ABOUTME: Stores uploads below a root directory and serves them as file:// URLs.

from pathlib import Path, PurePosixPath

from oneword.backend.exceptions import StorageError


class LocalObjectStorage:
    """Object storage rooted at a local directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the storage.

        Args:
            root: Directory that holds all uploaded objects.
        """
        self.root = root

    def _resolve(self, path: str) -> Path:
        parts = PurePosixPath(path).parts
        if not parts or path.startswith("/") or ".." in parts:
            raise StorageError(f"Invalid object path: {path!r}")
        return self.root.joinpath(*parts)

    async def upload(self, path: str, data: bytes, *, upsert: bool = False) -> None:
        """Write an object.

        Args:
            path: Relative object path, e.g. "<user_id>/avatar.png".
            data: Object contents.
            upsert: Overwrite an existing object instead of failing.

        Raises:
            StorageError: If the path is invalid, the object exists and upsert
                is False, or the write fails.
        """
        target = self._resolve(path)
        if target.exists() and not upsert:
            raise StorageError("The resource already exists")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(str(e)) from e

    def public_url(self, path: str) -> str:
        """Return the URL an uploaded object is served from."""
        return self._resolve(path).resolve().as_uri()
