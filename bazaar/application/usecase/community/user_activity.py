"""User activity use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from bazaar.application.usecase.pagination import PageInfo, offset_for
from bazaar.application.usecase.question.views import AnswerItem, QuestionItem
from bazaar.config import CommunitySettings
from bazaar.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
)
from bazaar.domain.value import (
    ActivityType,
    AnswerStatus,
    QuestionSortOrder,
    QuestionStatus,
    UserId,
)


class UserActivityRequest(BaseModel):
    """User activity request."""

    user_id: str  # UUID string
    activity_type: ActivityType = ActivityType.ALL
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class UserActivityResponse(BaseModel):
    """A user's recent questions and answers.

    ``pagination`` is only present when a single activity type is listed.
    """

    questions: list[QuestionItem]
    answers: list[AnswerItem]
    pagination: Optional[PageInfo] = None


class UserActivityUseCase:
    """Use case for a user's community activity feed."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        community_settings: CommunitySettings,
    ) -> None:
        """Initialize user activity use case.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            community_settings: Community configuration (preview size)
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.settings = community_settings

    async def execute(self, request: UserActivityRequest) -> UserActivityResponse:
        """Execute user activity flow.

        With ``all`` the newest few questions and answers are returned
        together; otherwise one type is paginated.

        Args:
            request: User, activity type and page

        Returns:
            The user's active questions and/or answers, newest first
        """
        user_id = UserId(UUID(request.user_id))
        criteria = QuestionFilter(status=QuestionStatus.ACTIVE, author_id=user_id)

        with logfire.span(
            "user_activity.execute",
            user_id=request.user_id,
            activity_type=request.activity_type.value,
        ):
            if request.activity_type == ActivityType.ALL:
                preview = self.settings.activity_preview_size
                questions = await self.question_repository.find_all(
                    criteria, sort=QuestionSortOrder.NEWEST, limit=preview
                )
                answers = await self.answer_repository.find_by_author(
                    user_id, status=AnswerStatus.ACTIVE, limit=preview
                )
                return UserActivityResponse(
                    questions=[QuestionItem.from_domain(q) for q in questions],
                    answers=[AnswerItem.from_domain(a) for a in answers],
                )

            offset = offset_for(request.page, request.limit)
            if request.activity_type == ActivityType.QUESTIONS:
                total = await self.question_repository.count(criteria)
                questions = await self.question_repository.find_all(
                    criteria,
                    sort=QuestionSortOrder.NEWEST,
                    limit=request.limit,
                    offset=offset,
                )
                return UserActivityResponse(
                    questions=[QuestionItem.from_domain(q) for q in questions],
                    answers=[],
                    pagination=PageInfo.build(request.page, request.limit, total),
                )

            total = await self.answer_repository.count_by_author(user_id)
            answers = await self.answer_repository.find_by_author(
                user_id, status=AnswerStatus.ACTIVE, limit=request.limit, offset=offset
            )
            return UserActivityResponse(
                questions=[],
                answers=[AnswerItem.from_domain(a) for a in answers],
                pagination=PageInfo.build(request.page, request.limit, total),
            )
