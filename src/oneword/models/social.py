# ABOUTME: SQLModels for follow edges and notifications.
# ABOUTME: A follow edge is directed and unique per (follower, following) pair.

from datetime import datetime
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from oneword.models.profile import new_id, utcnow


class NotificationType(str, Enum):
    """What a notification is about."""

    REACTION = "reaction"
    FOLLOW = "follow"


class Follow(SQLModel, table=True):
    """A directed edge from follower to followed user."""

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="follows_follower_following_key"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    follower_id: str = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    following_id: str = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utcnow)


class Notification(SQLModel, table=True):
    """Tells user_id that actor_id reacted to their word or followed them."""

    __tablename__ = "notifications"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    actor_id: str = Field(foreign_key="profiles.id", ondelete="CASCADE")
    type: NotificationType
    word_id: str | None = Field(default=None, foreign_key="words.id", ondelete="CASCADE")
    emoji: str | None = None
    read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
