# ABOUTME: SQLModel for user profiles.
# ABOUTME: Holds identity, display details, admin flag, and the backend-maintained posting streak.

from datetime import UTC, date, datetime
from uuid import uuid4

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate a new opaque row identifier."""
    return str(uuid4())


class Profile(SQLModel, table=True):
    """A user of the feed."""

    __tablename__ = "profiles"

    id: str = Field(default_factory=new_id, primary_key=True)
    username: str = Field(index=True, unique=True, description="Public handle")
    display_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_post_date: date | None = None

    is_admin: bool = False

    @property
    def label(self) -> str:
        """Display name if set, otherwise the username."""
        return self.display_name or self.username
