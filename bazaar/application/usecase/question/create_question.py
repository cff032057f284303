"""Create question use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import QuestionService
from bazaar.domain.value import QuestionCategory, UserId

from .views import QuestionItem


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    author_id: str  # User ID from authenticated user
    title: str
    content: str
    category: QuestionCategory = QuestionCategory.GENERAL
    tags: list[str] = []


class CreateQuestionUseCase:
    """Use case for asking a community question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: CreateQuestionRequest) -> QuestionItem:
        """Execute create question flow.

        Args:
            request: Create question request

        Returns:
            The created question

        Raises:
            ValidationError: If title, content or tags are invalid
        """
        question = await self.question_service.create_question(
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            content=request.content,
            category=request.category,
            tags=request.tags,
        )
        return QuestionItem.from_domain(question)
