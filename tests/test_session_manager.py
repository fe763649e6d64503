# ABOUTME: Tests for the keyring-backed session manager.
# ABOUTME: Covers sign-in, sign-out, the current user lookup, and the known accounts file.

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from keyring.errors import PasswordDeleteError

from oneword.auth import SessionManager


@pytest.fixture
def accounts_file(tmp_path: Path) -> Path:
    """A temporary accounts file path."""
    return tmp_path / "accounts.json"


@pytest.fixture
def mock_keyring() -> MagicMock:
    """Create a mock keyring for testing."""
    with patch("oneword.auth.session_manager.keyring") as mock:
        mock.get_password = MagicMock(return_value=None)
        mock.set_password = MagicMock()
        mock.delete_password = MagicMock()
        yield mock


@pytest.fixture
def session_manager(accounts_file: Path, mock_keyring: MagicMock) -> SessionManager:
    """Create a SessionManager instance with mocked dependencies."""
    return SessionManager(accounts_file=accounts_file)


class TestSessionManagerInit:
    """Tests for SessionManager initialization."""

    def test_default_accounts_file(self) -> None:
        """Test that the accounts file defaults to ~/.oneword/accounts.json."""
        assert SessionManager().accounts_file == Path.home() / ".oneword" / "accounts.json"


class TestSignIn:
    """Tests for sign_in and current_user_id."""

    def test_sign_in_stores_user_id(
        self, session_manager: SessionManager, mock_keyring: MagicMock
    ) -> None:
        """Signing in stores the id in the keyring."""
        session_manager.sign_in("user-1", "alice")

        mock_keyring.set_password.assert_called_once_with("oneword", "current_user", "user-1")

    def test_current_user_id_reads_keyring(
        self, session_manager: SessionManager, mock_keyring: MagicMock
    ) -> None:
        """The current user comes from the keyring."""
        mock_keyring.get_password.return_value = "user-1"

        assert session_manager.current_user_id() == "user-1"
        mock_keyring.get_password.assert_called_once_with("oneword", "current_user")

    def test_signed_out_is_none(self, session_manager: SessionManager) -> None:
        """No stored id means nobody is signed in."""
        assert session_manager.current_user_id() is None

    def test_sign_in_records_account_once(
        self, session_manager: SessionManager, accounts_file: Path
    ) -> None:
        """Usernames are added to the accounts file without duplicates."""
        session_manager.sign_in("user-1", "alice")
        session_manager.sign_in("user-1", "alice")
        session_manager.sign_in("user-2", "bob")

        assert json.loads(accounts_file.read_text()) == {"accounts": ["alice", "bob"]}
        assert session_manager.list_accounts() == ["alice", "bob"]

    def test_sign_in_without_username(
        self, session_manager: SessionManager, accounts_file: Path
    ) -> None:
        """Signing in by id alone leaves the accounts file alone."""
        session_manager.sign_in("user-1")
        assert not accounts_file.exists()


class TestSignOut:
    """Tests for sign_out."""

    def test_sign_out_deletes_password(
        self, session_manager: SessionManager, mock_keyring: MagicMock
    ) -> None:
        """Signing out removes the keyring entry."""
        session_manager.sign_out()
        mock_keyring.delete_password.assert_called_once_with("oneword", "current_user")

    def test_sign_out_twice_is_harmless(
        self, session_manager: SessionManager, mock_keyring: MagicMock
    ) -> None:
        """A missing keyring entry is ignored."""
        mock_keyring.delete_password.side_effect = PasswordDeleteError("not found")
        session_manager.sign_out()


class TestAccountsFile:
    """Tests for the known accounts list."""

    def test_missing_file(self, session_manager: SessionManager) -> None:
        """No file means no accounts."""
        assert session_manager.list_accounts() == []

    @pytest.mark.parametrize("content", ["", "not json", '{"accounts": "alice"}'])
    def test_invalid_file(
        self, session_manager: SessionManager, accounts_file: Path, content: str
    ) -> None:
        """Empty or malformed files are treated as empty."""
        accounts_file.write_text(content)
        assert session_manager.list_accounts() == []
