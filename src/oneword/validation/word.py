# ABOUTME: Single-word validation rules for daily posts.
# ABOUTME: Classifies input as valid or as exactly one WordErrorKind with a user-facing message.

import re
from enum import Enum

MAX_WORD_LENGTH = 45

_WORD_PATTERN = re.compile(r"[a-zA-Z'\-]+")


def _utf16_length(value: str) -> int:
    """Length in UTF-16 code units, so astral characters count twice."""
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


class WordErrorKind(str, Enum):
    """Reasons a submission is not an acceptable single word."""

    EMPTY = "empty"
    MULTI_WORD = "multi_word"
    TOO_LONG = "too_long"
    INVALID_CHARS = "invalid_chars"

    @property
    def message(self) -> str:
        """Inline message shown next to the input."""
        return _MESSAGES[self]


_MESSAGES: dict[WordErrorKind, str] = {
    WordErrorKind.EMPTY: "Say something.",
    WordErrorKind.MULTI_WORD: "One word only.",
    WordErrorKind.TOO_LONG: "Too long.",
    WordErrorKind.INVALID_CHARS: "Letters only.",
}


def validate_word(value: str) -> WordErrorKind | None:
    """Validate a candidate word.

    Checks run on the trimmed value in a fixed order and the first failure
    is the one reported: empty, then multi-word, then length, then
    character class.

    Args:
        value: Raw user input.

    Returns:
        The failing WordErrorKind, or None when the word is acceptable.
    """
    trimmed = value.strip()
    if not trimmed:
        return WordErrorKind.EMPTY
    if " " in trimmed:
        return WordErrorKind.MULTI_WORD
    if _utf16_length(trimmed) > MAX_WORD_LENGTH:
        return WordErrorKind.TOO_LONG
    if not _WORD_PATTERN.fullmatch(trimmed):
        return WordErrorKind.INVALID_CHARS
    return None


def normalize_word(value: str) -> str:
    """Return the stored form of a word: trimmed and lower-cased."""
    return value.strip().lower()
