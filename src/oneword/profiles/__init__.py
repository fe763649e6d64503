# ABOUTME: Profiles package for editing the signed-in user's profile.
# ABOUTME: Exports ProfileEditor for display names and avatar uploads.

from oneword.profiles.service import ProfileEditor

__all__ = ["ProfileEditor"]
