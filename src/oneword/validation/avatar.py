# ABOUTME: Avatar upload checks and storage path construction.
# ABOUTME: Rejects oversized or non-image files before anything is sent to object storage.

DEFAULT_MAX_AVATAR_BYTES = 1_048_576


def validate_avatar(
    size: int,
    content_type: str,
    max_bytes: int = DEFAULT_MAX_AVATAR_BYTES,
) -> str | None:
    """Validate an avatar upload.

    Args:
        size: File size in bytes.
        content_type: MIME type reported for the file.
        max_bytes: Largest accepted size in bytes.

    Returns:
        A user-facing error message, or None if the file is acceptable.
    """
    if size > max_bytes:
        return "Image must be under 1MB."
    if not content_type.startswith("image/"):
        return "File must be an image."
    return None


def avatar_storage_path(user_id: str, filename: str) -> str:
    """Build the object storage path for a user's avatar.

    The extension is taken from the uploaded filename and falls back to
    "jpg" when the name has none.

    Args:
        user_id: Owner of the avatar.
        filename: Original filename of the upload.

    Returns:
        Path of the form "<user_id>/avatar.<ext>".
    """
    _, dot, ext = filename.rpartition(".")
    if not dot or not ext:
        ext = "jpg"
    return f"{user_id}/avatar.{ext.lower()}"
