# ABOUTME: Action classes guarded by client-side rate limiters.
# ABOUTME: Maps each ActionType to its configured (max_actions, window_ms) pair.

from enum import Enum

from oneword.config import Settings


class ActionType(str, Enum):
    """Types of rate-limited actions."""

    POST_WORD = "post_word"
    REACT = "react"
    FOLLOW = "follow"
    DELETE_POST = "delete_post"


def limits_for(action_type: ActionType, settings: Settings) -> tuple[int, int]:
    """Look up the configured limits for an action type.

    Args:
        action_type: The guarded action.
        settings: Application settings holding the per-action limits.

    Returns:
        Tuple of (max_actions, window_ms).
    """
    limits = {
        ActionType.POST_WORD: (settings.post_max_actions, settings.post_window_ms),
        ActionType.REACT: (settings.react_max_actions, settings.react_window_ms),
        ActionType.FOLLOW: (settings.follow_max_actions, settings.follow_window_ms),
        ActionType.DELETE_POST: (settings.delete_max_actions, settings.delete_window_ms),
    }
    return limits[action_type]
