"""Add comment use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.application.usecase.question.views import CommentItem
from bazaar.domain.service import CommentService
from bazaar.domain.value import AnswerId, UserId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    answer_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str


class AddCommentUseCase:
    """Use case for commenting on an answer."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> CommentItem:
        """Execute add comment flow.

        Raises:
            NotFoundError: If the answer does not exist or was deleted
            ValidationError: If the content is empty or too long
        """
        comment = await self.comment_service.add_comment(
            AnswerId(UUID(request.answer_id)),
            UserId(UUID(request.author_id)),
            request.content,
        )
        return CommentItem.from_domain(comment)
