# ABOUTME: Validation package for user-supplied input.
# ABOUTME: Exports the single-word validator and avatar upload checks.

from oneword.validation.avatar import avatar_storage_path, validate_avatar
from oneword.validation.exceptions import WordValidationError
from oneword.validation.word import (
    MAX_WORD_LENGTH,
    WordErrorKind,
    normalize_word,
    validate_word,
)

__all__ = [
    "MAX_WORD_LENGTH",
    "WordErrorKind",
    "WordValidationError",
    "avatar_storage_path",
    "normalize_word",
    "validate_avatar",
    "validate_word",
]
