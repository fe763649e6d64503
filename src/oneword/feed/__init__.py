# ABOUTME: Feed package assembling words with authors and reaction summaries.
# ABOUTME: Exports FeedService and the FeedItem/ProfileView read models.

from oneword.feed.service import FeedItem, FeedService, ProfileView

__all__ = ["FeedItem", "FeedService", "ProfileView"]
