"""Community statistics and activity routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from bazaar.application.usecase.auth import GetCurrentUserUseCase
from bazaar.application.usecase.community import (
    CommunityStatsRequest,
    CommunityStatsResponse,
    CommunityStatsUseCase,
    UserActivityRequest,
    UserActivityResponse,
    UserActivityUseCase,
)
from bazaar.domain.value import ActivityType
from bazaar.interface.api.auth import require_admin, require_principal
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(prefix="/community", tags=["community"], route_class=DishkaRoute)


@router.get("/stats", response_model=Envelope[CommunityStatsResponse])
async def community_stats(
    community_stats_use_case: FromDishka[CommunityStatsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
) -> Envelope[CommunityStatsResponse]:
    """Community totals and category breakdown. Admin only."""
    principal = require_admin(
        await require_principal(get_current_user_use_case, token)
    )
    result = await community_stats_use_case.execute(
        CommunityStatsRequest(requester=principal)
    )
    return envelope(result)


@router.get("/users/{user_id}/activity", response_model=Envelope[UserActivityResponse])
async def user_activity(
    user_id: UUID,
    user_activity_use_case: FromDishka[UserActivityUseCase],
    activity_type: ActivityType = Query(default=ActivityType.ALL, alias="type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> Envelope[UserActivityResponse]:
    """A user's questions and answers, newest first. Public."""
    result = await user_activity_use_case.execute(
        UserActivityRequest(
            user_id=str(user_id), activity_type=activity_type, page=page, limit=limit
        )
    )
    return envelope(result)


@router.get("/my-activity", response_model=Envelope[UserActivityResponse])
async def my_activity(
    user_activity_use_case: FromDishka[UserActivityUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Cookie(default=None),
    activity_type: ActivityType = Query(default=ActivityType.ALL, alias="type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> Envelope[UserActivityResponse]:
    """The caller's own questions and answers."""
    principal = await require_principal(get_current_user_use_case, token)
    result = await user_activity_use_case.execute(
        UserActivityRequest(
            user_id=str(principal.id),
            activity_type=activity_type,
            page=page,
            limit=limit,
        )
    )
    return envelope(result)
