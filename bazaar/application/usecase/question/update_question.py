"""Update question use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import QuestionId, UserId

from .views import QuestionItem


class UpdateQuestionRequest(BaseModel):
    """Update question request.

    Fields left as None keep their current value.
    """

    question_id: str  # UUID string
    editor_id: str  # User ID from authenticated user
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[list[str]] = None


class UpdateQuestionUseCase:
    """Use case for the author editing their question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: UpdateQuestionRequest) -> QuestionItem:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question does not exist or was deleted
            NotAuthorizedError: If the editor is not the author
            ValidationError: If an edited field is invalid
        """
        question = await self.question_service.update_question(
            QuestionId(UUID(request.question_id)),
            UserId(UUID(request.editor_id)),
            title=request.title,
            content=request.content,
            tags=request.tags,
        )
        return QuestionItem.from_domain(question)
