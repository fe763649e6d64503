# ABOUTME: SQLModel for the daily prompt every word answers.
# ABOUTME: At most one prompt may be active on a given date.

from datetime import date

from sqlmodel import Field, SQLModel

from oneword.models.profile import new_id


class Prompt(SQLModel, table=True):
    """The question of the day."""

    __tablename__ = "prompts"

    id: str = Field(default_factory=new_id, primary_key=True)
    question: str
    active_date: date = Field(index=True, unique=True)
