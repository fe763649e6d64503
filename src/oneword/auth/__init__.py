# ABOUTME: Auth package for the local sign-in session.
# ABOUTME: Provides SessionManager for storing the signed-in user id in the OS keyring.

from oneword.auth.session_manager import SessionManager

__all__ = ["SessionManager"]
