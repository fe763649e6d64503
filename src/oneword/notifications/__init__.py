# ABOUTME: Notifications package for reaction and follow alerts.
# ABOUTME: Exports NotificationService for best-effort creation, listing, and read tracking.

from oneword.notifications.service import NotificationService

__all__ = ["NotificationService"]
