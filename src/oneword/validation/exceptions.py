# ABOUTME: Exception classes for input validation.
# ABOUTME: Contains WordValidationError carrying the specific WordErrorKind.

from oneword.errors import OneWordError
from oneword.validation.word import WordErrorKind


class WordValidationError(OneWordError):
    """Exception raised when a word submission fails validation.

    Attributes:
        kind: The WordErrorKind that failed first.
    """

    def __init__(self, kind: WordErrorKind) -> None:
        """Initialize the exception.

        Args:
            kind: The failing validation rule.
        """
        super().__init__(kind.message)
        self.kind = kind
