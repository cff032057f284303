"""Mark best answer use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.application.usecase.question.views import AnswerItem
from bazaar.domain.service import AnswerService
from bazaar.domain.value import AnswerId, UserId


class MarkBestAnswerRequest(BaseModel):
    """Mark best answer request."""

    answer_id: str  # UUID string
    requester_id: str  # User ID from authenticated user


class MarkBestAnswerUseCase:
    """Use case for the question author choosing the best answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: MarkBestAnswerRequest) -> AnswerItem:
        """Execute mark best answer flow.

        Raises:
            NotFoundError: If the answer or its question does not exist
            ForbiddenError: If the requester did not ask the question
        """
        answer = await self.answer_service.mark_best_answer(
            AnswerId(UUID(request.answer_id)), UserId(UUID(request.requester_id))
        )
        return AnswerItem.from_domain(answer)
