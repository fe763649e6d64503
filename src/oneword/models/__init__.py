# ABOUTME: Models package for oneword data structures.
# ABOUTME: Exports the SQLModel tables mirrored from the hosted backend.

from oneword.models.profile import Profile
from oneword.models.prompt import Prompt
from oneword.models.social import Follow, Notification, NotificationType
from oneword.models.word import REACTION_EMOJIS, Reaction, ReactionEmoji, Word

__all__ = [
    "Follow",
    "Notification",
    "NotificationType",
    "Profile",
    "Prompt",
    "REACTION_EMOJIS",
    "Reaction",
    "ReactionEmoji",
    "Word",
]
