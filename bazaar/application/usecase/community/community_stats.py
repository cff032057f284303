"""Community statistics use case."""

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import Principal, QuestionCategory


class CategoryBreakdownItem(BaseModel):
    """Number of active questions in one category."""

    category: QuestionCategory
    count: int


class CommunityStatsRequest(BaseModel):
    """Community statistics request."""

    requester: Principal


class CommunityStatsResponse(BaseModel):
    """Community-wide totals."""

    total_questions: int
    active_questions: int
    answered_questions: int
    total_views: int
    total_votes: int
    total_answers: int
    best_answers: int
    category_breakdown: list[CategoryBreakdownItem]


class CommunityStatsUseCase:
    """Use case for the administrators' community dashboard."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: CommunityStatsRequest) -> CommunityStatsResponse:
        """Execute community statistics flow.

        Raises:
            ForbiddenError: If the requester is not an administrator
        """
        questions, answers = await self.question_service.community_stats(
            request.requester
        )
        return CommunityStatsResponse(
            total_questions=questions.total_questions,
            active_questions=questions.active_questions,
            answered_questions=questions.answered_questions,
            total_views=questions.total_views,
            total_votes=questions.total_votes,
            total_answers=answers.total_answers,
            best_answers=answers.best_answers,
            category_breakdown=[
                CategoryBreakdownItem(category=entry.category, count=entry.count)
                for entry in questions.category_breakdown
            ],
        )
