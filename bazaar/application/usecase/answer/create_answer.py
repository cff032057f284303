"""Create answer use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.application.usecase.question.views import AnswerItem
from bazaar.domain.service import AnswerService
from bazaar.domain.value import QuestionId, UserId


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: CreateAnswerRequest) -> AnswerItem:
        """Execute create answer flow.

        Raises:
            NotFoundError: If the question does not exist or is not active
            ValidationError: If the content is empty or too long
        """
        answer = await self.answer_service.create_answer(
            QuestionId(UUID(request.question_id)),
            UserId(UUID(request.author_id)),
            request.content,
        )
        return AnswerItem.from_domain(answer)
