"""Business logic services for the Plaza application."""

from .consistency import ConsistencyService, ReconcileReport
from .moderation import ModerationService
from .reactions import ReactionService
from .social_graph import FollowState, SocialGraphService
from .visibility import SortOrder, VisibilityService

__all__ = [
    "ConsistencyService",
    "ReconcileReport",
    "ModerationService",
    "ReactionService",
    "FollowState",
    "SocialGraphService",
    "SortOrder",
    "VisibilityService",
]
