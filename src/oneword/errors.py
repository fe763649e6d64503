# ABOUTME: Base exception class for oneword application errors.
# ABOUTME: Provides a common base for all custom exceptions in the application.


class OneWordError(Exception):
    """Base exception for all oneword errors.

    Every custom exception in the package inherits from this class so the
    CLI can render any of them inline with a single handler.
    """

    pass


class NotAuthenticatedError(OneWordError):
    """Raised when an action needs a signed-in user and there is none."""

    pass


class NotAdminError(OneWordError):
    """Raised when a non-admin profile attempts an admin-only action."""

    pass
