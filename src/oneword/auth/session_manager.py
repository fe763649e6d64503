# ABOUTME: Session manager remembering which user is signed in on this machine.
# ABOUTME: Uses the OS keyring for the user id and keeps a list of known usernames.

import json
from pathlib import Path
from typing import Any

import keyring
from keyring.errors import PasswordDeleteError


class SessionManager:
    """AuthProvider backed by the OS keyring."""

    SERVICE_NAME = "oneword"
    SESSION_KEY = "current_user"
    DEFAULT_ACCOUNTS_FILE = Path.home() / ".oneword" / "accounts.json"

    def __init__(self, accounts_file: Path | None = None) -> None:
        """Initialize the session manager.

        Args:
            accounts_file: Path to JSON file storing known usernames.
                Defaults to ~/.oneword/accounts.json
        """
        self.accounts_file = (
            accounts_file if accounts_file is not None else self.DEFAULT_ACCOUNTS_FILE
        )

    def current_user_id(self) -> str | None:
        """Return the signed-in user id, or None if signed out."""
        return keyring.get_password(self.SERVICE_NAME, self.SESSION_KEY)

    def sign_in(self, user_id: str, username: str | None = None) -> None:
        """Remember user_id as the signed-in user.

        Args:
            user_id: Profile id of the user.
            username: Username to add to the known accounts list.
        """
        keyring.set_password(self.SERVICE_NAME, self.SESSION_KEY, user_id)
        if username:
            self._add_account_to_list(username)

    def sign_out(self) -> None:
        """Forget the signed-in user. Signing out twice is harmless."""
        try:
            keyring.delete_password(self.SERVICE_NAME, self.SESSION_KEY)
        except PasswordDeleteError:
            pass

    def list_accounts(self) -> list[str]:
        """List usernames that have signed in on this machine."""
        return self._load_accounts()

    def _load_accounts(self) -> list[str]:
        """Load usernames from the accounts file.

        Returns:
            List of usernames, or empty list if file doesn't exist or is empty/invalid.
        """
        if not self.accounts_file.exists():
            return []

        try:
            content = self.accounts_file.read_text().strip()
            if not content:
                return []
            data: dict[str, Any] = json.loads(content)
            accounts = data.get("accounts", [])
            if isinstance(accounts, list):
                return [str(acc) for acc in accounts]
            return []
        except (json.JSONDecodeError, OSError):
            return []

    def _save_accounts(self, accounts: list[str]) -> None:
        self.accounts_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.accounts_file, "w") as f:
            json.dump({"accounts": accounts}, f, indent=2)

    def _add_account_to_list(self, username: str) -> None:
        accounts = self._load_accounts()
        if username not in accounts:
            accounts.append(username)
            self._save_accounts(accounts)
