# ABOUTME: Display helper for rate limiter status using Rich formatting.
# ABOUTME: Provides methods to render limiter status as dictionaries and Rich panels.

from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oneword.rate_limit.service import RateLimiter


class RateLimitDisplay:
    """Display helper for a set of named rate limiters.

    Provides methods to format and render rate limit information
    for display in the CLI using Rich formatting.
    """

    WARNING_THRESHOLD = 1

    def __init__(self, limiters: dict[str, RateLimiter]) -> None:
        """Initialize the display helper.

        Args:
            limiters: Mapping of label to the RateLimiter to report on.
        """
        self._limiters = limiters

    def get_status_dict(self, label: str) -> dict[str, Any]:
        """Get the current status of one limiter as a dictionary.

        Args:
            label: Key of the limiter in the mapping given at construction.

        Returns:
            Dictionary containing:
                - max_actions: Maximum allowed actions per window
                - window_seconds: Window length in seconds
                - remaining_actions: Actions still allowed in the window
                - retry_after: Seconds until the next action is allowed
                - is_warning: True if remaining actions are at or below the threshold
        """
        limiter = self._limiters[label]
        remaining = limiter.remaining()

        return {
            "max_actions": limiter.max_actions,
            "window_seconds": limiter.window_ms / 1000,
            "remaining_actions": remaining,
            "retry_after": limiter.retry_after(),
            "is_warning": remaining <= self.WARNING_THRESHOLD,
        }

    def render_status(self) -> Panel:
        """Render every limiter as one row of a Rich Panel.

        Returns:
            A Rich Panel containing the formatted status information.
        """
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Action", style="dim")
        table.add_column("Limit")
        table.add_column("Remaining")
        table.add_column("Retry In")

        any_blocked = False
        for label in self._limiters:
            status = self.get_status_dict(label)

            limit_text = f"{status['max_actions']} / {status['window_seconds']:g}s"
            remaining_style = "red bold" if status["is_warning"] else "green"
            retry = status["retry_after"]
            if retry:
                any_blocked = True

            table.add_row(
                label,
                limit_text,
                Text(str(status["remaining_actions"]), style=remaining_style),
                Text(f"{retry}s" if retry else "-", style="cyan"),
            )

        return Panel(
            table,
            title="⚠️  Rate Limited" if any_blocked else "Rate Limit Status",
            border_style="red" if any_blocked else "green",
            padding=(1, 2),
        )
