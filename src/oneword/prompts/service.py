# ABOUTME: Admin management of daily prompts through the DataStore.
# ABOUTME: Maps the one-prompt-per-date unique violation to a friendly message.

from datetime import date

from oneword.backend.exceptions import DataStoreError
from oneword.backend.protocol import DataStore, Row
from oneword.errors import NotAdminError, NotAuthenticatedError, OneWordError

DUPLICATE_DATE_MESSAGE = "A prompt already exists for that date."


class PromptError(OneWordError):
    """A prompt could not be created or changed."""

    pass


class PromptManager:
    """Create, edit, and remove prompts on behalf of an admin."""

    def __init__(self, store: DataStore, user_id: str | None) -> None:
        """Initialize the prompt manager.

        Args:
            store: Data store holding prompts and profiles.
            user_id: The signed-in user performing admin actions.
        """
        self._store = store
        self._user_id = user_id

    async def require_admin(self) -> None:
        """Ensure the current user is an admin.

        Raises:
            NotAuthenticatedError: If nobody is signed in.
            NotAdminError: If the profile is not an admin.
        """
        if self._user_id is None:
            raise NotAuthenticatedError("Sign in as an admin to manage prompts.")
        rows = await self._store.select("profiles", {"id": self._user_id}, limit=1)
        if not rows or not rows[0].get("is_admin"):
            raise NotAdminError("Only admins can manage prompts.")

    def _wrap(self, error: DataStoreError) -> PromptError:
        if error.is_unique_violation:
            return PromptError(DUPLICATE_DATE_MESSAGE)
        return PromptError(str(error))

    async def create(self, question: str, active_date: date) -> Row:
        """Schedule a new prompt.

        Raises:
            NotAdminError: If the user is not an admin.
            PromptError: If the question is blank or the date is taken.
        """
        await self.require_admin()
        if not question.strip():
            raise PromptError("Question cannot be empty.")
        try:
            return await self._store.insert(
                "prompts", {"question": question.strip(), "active_date": active_date}
            )
        except DataStoreError as e:
            raise self._wrap(e) from e

    async def update(self, prompt_id: str, question: str, active_date: date) -> Row:
        """Change a prompt's question and date.

        Raises:
            NotAdminError: If the user is not an admin.
            PromptError: If the question is blank, the date is taken, or the
                prompt does not exist.
        """
        await self.require_admin()
        if not question.strip():
            raise PromptError("Question cannot be empty.")
        try:
            rows = await self._store.update(
                "prompts",
                {"question": question.strip(), "active_date": active_date},
                {"id": prompt_id},
            )
        except DataStoreError as e:
            raise self._wrap(e) from e
        if not rows:
            raise PromptError("Prompt not found.")
        return rows[0]

    async def delete(self, prompt_id: str) -> bool:
        """Remove a prompt.

        Returns:
            True if a prompt was removed.
        """
        await self.require_admin()
        try:
            return await self._store.delete("prompts", {"id": prompt_id}) > 0
        except DataStoreError as e:
            raise self._wrap(e) from e

    async def todays_prompt(self, today: date) -> Row | None:
        """The prompt active on the given day, if any."""
        rows = await self._store.select("prompts", {"active_date": today}, limit=1)
        return rows[0] if rows else None
