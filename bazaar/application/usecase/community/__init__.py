"""Community dashboard use cases."""

from .community_stats import (
    CategoryBreakdownItem,
    CommunityStatsRequest,
    CommunityStatsResponse,
    CommunityStatsUseCase,
)
from .user_activity import (
    UserActivityRequest,
    UserActivityResponse,
    UserActivityUseCase,
)

__all__ = [
    "CategoryBreakdownItem",
    "CommunityStatsRequest",
    "CommunityStatsResponse",
    "CommunityStatsUseCase",
    "UserActivityRequest",
    "UserActivityResponse",
    "UserActivityUseCase",
]
