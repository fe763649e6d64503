# ABOUTME: Configuration module for application settings.
# ABOUTME: Uses pydantic-settings for environment variable overrides and provides cached access.

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    ONEWORD_ prefix (e.g., ONEWORD_DB_PATH).
    """

    model_config = SettingsConfigDict(
        env_prefix="ONEWORD_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    db_path: Annotated[Path, Field(description="Path to SQLite database file")] = (
        Path.home() / ".oneword" / "data.db"
    )

    accounts_file: Annotated[Path, Field(description="Path to known usernames JSON file")] = (
        Path.home() / ".oneword" / "accounts.json"
    )

    avatars_dir: Annotated[Path, Field(description="Directory for uploaded avatars")] = (
        Path.home() / ".oneword" / "avatars"
    )

    log_level: Annotated[str, Field(description="Logging level name")] = "WARNING"

    post_max_actions: Annotated[int, Field(description="Word posts allowed per window", ge=1)] = 3
    post_window_ms: Annotated[int, Field(description="Word post window in ms", ge=1)] = 60_000

    react_max_actions: Annotated[int, Field(description="Reactions allowed per window", ge=1)] = 10
    react_window_ms: Annotated[int, Field(description="Reaction window in ms", ge=1)] = 30_000

    follow_max_actions: Annotated[
        int, Field(description="Follow toggles allowed per window", ge=1)
    ] = 5
    follow_window_ms: Annotated[int, Field(description="Follow toggle window in ms", ge=1)] = 30_000

    delete_max_actions: Annotated[
        int, Field(description="Post deletions allowed per window", ge=1)
    ] = 3
    delete_window_ms: Annotated[int, Field(description="Post deletion window in ms", ge=1)] = 60_000

    feed_limit: Annotated[int, Field(description="Words shown in the feed", ge=1, le=500)] = 50

    notification_limit: Annotated[
        int, Field(description="Notifications fetched per listing", ge=1, le=200)
    ] = 20

    admin_usernames: Annotated[
        list[str], Field(description="Usernames granted admin rights on sign-in")
    ] = []

    max_avatar_bytes: Annotated[int, Field(description="Maximum avatar size in bytes", ge=1)] = (
        1_048_576
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings.

    Returns a cached Settings instance. Use get_settings.cache_clear()
    to clear the cache if needed.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def ensure_data_dir() -> Path:
    """Ensure the data directory exists.

    Creates the directory containing the database file if it doesn't exist.

    Returns:
        Path to the data directory.
    """
    settings = get_settings()
    data_dir = settings.db_path.parent
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
