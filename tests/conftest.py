# ABOUTME: Shared pytest fixtures for oneword tests.
# ABOUTME: Provides a temporary database, the local data store, a fake clock, and seeded rows.

from datetime import date
from pathlib import Path

import pytest

from oneword.backend import LocalDataStore
from oneword.database import DatabaseService
from oneword.models import Profile, Prompt, Word


class FakeClock:
    """Manually advanced millisecond clock for rate limiter tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at 0 ms."""
    return FakeClock()


@pytest.fixture
def db_service(tmp_path: Path) -> DatabaseService:
    """Create a DatabaseService with a temporary database."""
    service = DatabaseService(db_path=tmp_path / "test.db")
    service.init_db()
    return service


@pytest.fixture
def store(db_service: DatabaseService) -> LocalDataStore:
    """Create a LocalDataStore over the temporary database."""
    return LocalDataStore(db_service)


@pytest.fixture
def alice(db_service: DatabaseService) -> Profile:
    """A saved profile named alice."""
    return db_service.save_profile(Profile(username="alice"))


@pytest.fixture
def bob(db_service: DatabaseService) -> Profile:
    """A saved profile named bob."""
    return db_service.save_profile(Profile(username="bob"))


@pytest.fixture
def prompt(db_service: DatabaseService) -> Prompt:
    """A saved prompt active on 2024-03-01."""
    with db_service.get_session() as session:
        row = Prompt(question="How do you feel?", active_date=date(2024, 3, 1))
        session.add(row)
        session.commit()
        session.refresh(row)
        return row


@pytest.fixture
def bob_word(db_service: DatabaseService, bob: Profile, prompt: Prompt) -> Word:
    """Bob's answer to the prompt."""
    with db_service.get_session() as session:
        row = Word(user_id=bob.id, word="calm", prompt_id=prompt.id)
        session.add(row)
        session.commit()
        session.refresh(row)
        return row
