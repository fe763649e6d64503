# ABOUTME: Prompts package for managing the question of the day.
# ABOUTME: Exports PromptManager for admin create/update/delete and today's lookup.

from oneword.prompts.service import PromptManager

__all__ = ["PromptManager"]
