# ABOUTME: Rate limiting package for guarding bursts of user actions.
# ABOUTME: Exports the sliding-window RateLimiter, its action presets, and display helper.

from oneword.rate_limit.actions import ActionType, limits_for
from oneword.rate_limit.display import RateLimitDisplay
from oneword.rate_limit.exceptions import RateLimitExceeded
from oneword.rate_limit.service import RateLimiter

__all__ = ["ActionType", "RateLimiter", "RateLimitExceeded", "RateLimitDisplay", "limits_for"]
