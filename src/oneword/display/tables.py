# ABOUTME: Rich table rendering for feed items, notifications, and prompts.
# ABOUTME: Provides FeedTable plus helpers for the notification and prompt listings.

from typing import Any

from rich.table import Table

from oneword.feed import FeedItem
from oneword.models import REACTION_EMOJIS, NotificationType, Prompt


class FeedTable:
    """Renders FeedItem data as Rich tables.

    Each row shows the word, its author, the reaction summary, and the
    viewer's own reaction.
    """

    MAX_NAME_LENGTH = 20

    def _truncate(self, text: str | None, max_length: int) -> str:
        """Truncate text to max length with ellipsis.

        Args:
            text: The text to truncate, or None.
            max_length: Maximum length before truncation.

        Returns:
            Truncated text with ellipsis, or empty string if None.
        """
        if text is None:
            return ""
        if len(text) <= max_length:
            return text
        return text[: max_length - 3] + "..."

    def format_reactions(self, counts: dict[str, int]) -> str:
        """Format reaction counts in the fixed emoji order, skipping zeros."""
        parts = [f"{emoji} {counts[emoji]}" for emoji in REACTION_EMOJIS if counts.get(emoji)]
        return "  ".join(parts)

    def render(self, items: list[FeedItem], title: str | None = None) -> Table:
        """Render feed items as a Rich Table.

        Args:
            items: List of FeedItem objects to display.
            title: Optional title for the table.

        Returns:
            Rich Table with formatted feed data.
        """
        table = Table(title=title, show_lines=False)

        table.add_column("#", style="dim", width=4)
        table.add_column("Word", style="bold magenta")
        table.add_column("By", style="cyan", max_width=self.MAX_NAME_LENGTH)
        table.add_column("Reactions")
        table.add_column("You", width=4)
        table.add_column("Id", style="dim")

        for idx, item in enumerate(items, 1):
            table.add_row(
                str(idx),
                item.word.word,
                "@" + self._truncate(item.author_name, self.MAX_NAME_LENGTH - 1),
                self.format_reactions(item.reaction_counts),
                item.user_reaction or "",
                item.word.id[:8],
            )

        return table


def render_notifications(rows: list[dict[str, Any]], usernames: dict[str, str]) -> Table:
    """Render notification rows, newest first.

    Args:
        rows: Notification rows from NotificationService.list_for.
        usernames: Map of actor id to username.

    Returns:
        Rich Table listing the notifications.
    """
    table = Table(title="Notifications", show_header=False, box=None, padding=(0, 1))
    table.add_column("New", width=2)
    table.add_column("Message")

    for row in rows:
        actor = "@" + usernames.get(row["actor_id"], "someone")
        if row["type"] == NotificationType.FOLLOW:
            text = f"[cyan]{actor}[/cyan] followed you"
        else:
            text = f"[cyan]{actor}[/cyan] reacted {row.get('emoji') or ''} to your word"
        table.add_row("[magenta]•[/magenta]" if not row["read"] else "", text)

    return table


def render_prompts(prompts: list[Prompt], word_counts: dict[str, int] | None = None) -> Table:
    """Render prompts with their active dates and how many words answered them.

    Args:
        prompts: Prompts to list, newest first.
        word_counts: Map of prompt id to number of answers. Missing ids count as 0.

    Returns:
        Rich Table listing the prompts.
    """
    counts = word_counts or {}
    table = Table(title="Prompts", show_lines=False)
    table.add_column("Date", style="cyan")
    table.add_column("Question")
    table.add_column("Words", justify="right")
    table.add_column("Id", style="dim")

    for prompt in prompts:
        table.add_row(
            prompt.active_date.isoformat(),
            prompt.question,
            str(counts.get(prompt.id, 0)),
            prompt.id[:8],
        )

    return table
