# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports the feed table and the panels used for inline messages and summaries.

from oneword.display.errors import display_error, display_rate_limited, format_result
from oneword.display.status import (
    display_analytics,
    display_connections,
    display_profile,
    display_recap,
)
from oneword.display.tables import FeedTable, render_notifications, render_prompts

__all__ = [
    "FeedTable",
    "display_analytics",
    "display_connections",
    "display_error",
    "display_profile",
    "display_rate_limited",
    "display_recap",
    "format_result",
    "render_notifications",
    "render_prompts",
]
