"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import Principal, QuestionId


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str  # UUID string
    requester: Principal  # Authenticated author or admin


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    question_id: str
    deleted: bool


class DeleteQuestionUseCase:
    """Use case for soft-deleting a question."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question does not exist or was deleted
            NotAuthorizedError: If the requester is neither author nor admin
        """
        question = await self.question_service.delete_question(
            QuestionId(UUID(request.question_id)), request.requester
        )
        return DeleteQuestionResponse(question_id=str(question.id), deleted=True)
