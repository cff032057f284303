"""Change question status use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import Principal, QuestionId, QuestionStatus

from .views import QuestionItem


class ChangeQuestionStatusRequest(BaseModel):
    """Moderation status change request."""

    question_id: str  # UUID string
    moderator: Principal
    status: QuestionStatus


class ChangeQuestionStatusUseCase:
    """Use case for administrators closing, reopening or reviewing questions."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: ChangeQuestionStatusRequest) -> QuestionItem:
        """Execute status change flow.

        Raises:
            ForbiddenError: If the moderator is not an administrator
            NotFoundError: If the question does not exist
            InvalidOperationError: If the transition is not allowed
        """
        question = await self.question_service.change_status(
            QuestionId(UUID(request.question_id)), request.moderator, request.status
        )
        return QuestionItem.from_domain(question)
