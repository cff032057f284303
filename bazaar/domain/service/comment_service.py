"""Comment domain service."""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bazaar.domain.error import NotFoundError, ValidationError
from bazaar.domain.model.comment import Comment
from bazaar.domain.model.common import utcnow
from bazaar.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
)
from bazaar.domain.value import AnswerId, AnswerStatus, CommentId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comments on answers."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> None:
        self.comment_repository = comment_repository
        self.answer_repository = answer_repository
        self.question_repository = question_repository

    async def add_comment(
        self, answer_id: AnswerId, author_id: UserId, content: str
    ) -> Comment:
        """Comment on an answer.

        Args:
            answer_id: Answer being commented on
            author_id: Comment author
            content: Comment text (1-1000 characters)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the answer or its question does not exist or was
                deleted
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.add_comment",
            answer_id=str(answer_id),
            author_id=str(author_id),
        ):
            answer = await self.answer_repository.find_by_id(answer_id)
            if answer is None or answer.status == AnswerStatus.DELETED:
                raise NotFoundError("Answer", str(answer_id))

            question = await self.question_repository.find_by_id(answer.question_id)
            if question is None or question.is_deleted:
                raise NotFoundError("Question", str(answer.question_id))

            try:
                comment = Comment(
                    id=CommentId(uuid4()),
                    answer_id=answer_id,
                    author_id=author_id,
                    content=content,
                    created_at=utcnow(),
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid comment", error=str(e))
                raise ValidationError.from_pydantic(e)

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment added", comment_id=str(saved.id), answer_id=str(answer_id)
            )
            return saved
