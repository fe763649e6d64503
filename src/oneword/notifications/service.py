# ABOUTME: Notification service creating and reading reaction/follow notifications.
# ABOUTME: Creation is best effort: failures are logged and swallowed, never surfaced.

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from oneword.backend.exceptions import DataStoreError
from oneword.backend.protocol import DataStore, Row
from oneword.models import NotificationType

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates and reads notifications through a DataStore."""

    DEFAULT_LIMIT = 20

    def __init__(self, store: DataStore) -> None:
        """Initialize the notification service.

        Args:
            store: Data store holding the notifications table.
        """
        self._store = store
        self._pending: set[asyncio.Task[Any]] = set()

    async def _create(self, values: Row) -> bool:
        if values["user_id"] == values["actor_id"]:
            return False
        try:
            await self._store.insert("notifications", values)
        except DataStoreError as e:
            logger.debug("Ignoring failed %s notification: %s", values["type"], e)
            return False
        return True

    async def notify_follow(self, user_id: str, actor_id: str) -> bool:
        """Tell user_id that actor_id followed them.

        Returns:
            True if a notification was created.
        """
        return await self._create(
            {"user_id": user_id, "actor_id": actor_id, "type": NotificationType.FOLLOW}
        )

    async def notify_reaction(self, user_id: str, actor_id: str, word_id: str, emoji: str) -> bool:
        """Tell user_id that actor_id reacted to their word.

        Returns:
            True if a notification was created.
        """
        return await self._create(
            {
                "user_id": user_id,
                "actor_id": actor_id,
                "type": NotificationType.REACTION,
                "word_id": word_id,
                "emoji": emoji,
            }
        )

    def dispatch(self, coro: Coroutine[Any, Any, bool]) -> asyncio.Task[bool]:
        """Schedule a notification without waiting for it.

        The task is tracked until it finishes so it is not garbage collected
        mid-flight; use drain() before the event loop shuts down.
        """
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every dispatched notification to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def list_for(self, user_id: str, limit: int = DEFAULT_LIMIT) -> list[Row]:
        """Newest notifications for a user."""
        return await self._store.select(
            "notifications",
            {"user_id": user_id},
            order_by="created_at",
            descending=True,
            limit=limit,
        )

    async def unread_count(self, user_id: str) -> int:
        """Number of unread notifications for a user."""
        rows = await self._store.select("notifications", {"user_id": user_id, "read": False})
        return len(rows)

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification as read.

        Returns:
            How many notifications changed.
        """
        rows = await self._store.update(
            "notifications", {"read": True}, {"user_id": user_id, "read": False}
        )
        return len(rows)
