# ABOUTME: SQLModels for posted words and the reactions attached to them.
# ABOUTME: Unique constraints mirror the backend rules: one word per prompt, one reaction per word.

from datetime import datetime
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from oneword.models.profile import new_id, utcnow


class ReactionEmoji(str, Enum):
    """The fixed set of reactions."""

    FIRE = "🔥"
    EYES = "👀"
    SKULL = "💀"
    HEART = "❤️"
    THINKING = "🤔"


REACTION_EMOJIS: list[str] = [emoji.value for emoji in ReactionEmoji]


class Word(SQLModel, table=True):
    """One user's single-word answer to a prompt."""

    __tablename__ = "words"
    __table_args__ = (UniqueConstraint("user_id", "prompt_id", name="words_user_prompt_key"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    word: str = Field(max_length=45)
    prompt_id: str | None = Field(
        default=None, foreign_key="prompts.id", index=True, ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utcnow, index=True)


class Reaction(SQLModel, table=True):
    """One emoji left by one user on one word."""

    __tablename__ = "reactions"
    __table_args__ = (UniqueConstraint("word_id", "user_id", name="reactions_word_user_key"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    word_id: str = Field(foreign_key="words.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="profiles.id", index=True, ondelete="CASCADE")
    emoji: str
    created_at: datetime = Field(default_factory=utcnow)
