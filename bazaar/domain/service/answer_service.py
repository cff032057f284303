"""Answer domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bazaar.config import CommunitySettings
from bazaar.domain.error import (
    ForbiddenError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.model.answer import Answer
from bazaar.domain.model.common import utcnow
from bazaar.domain.repository import AnswerRepository, QuestionRepository
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    AnswerStatus,
    QuestionId,
    QuestionStatus,
    UserId,
)

from .base import Service


class AnswerService(Service):
    """Domain service for answers and best-answer selection."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        community_settings: CommunitySettings,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
            community_settings: Community configuration
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository
        self.settings = community_settings

    async def create_answer(
        self, question_id: QuestionId, author_id: UserId, content: str
    ) -> Answer:
        """Answer an active question.

        Args:
            question_id: Question being answered
            author_id: Answer author
            content: Answer body (1-10000 characters)

        Returns:
            Created answer

        Raises:
            NotFoundError: If the question does not exist or is not active
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author_id),
        ):
            question = await self.question_repository.find_by_id(
                question_id, for_update=True
            )
            if question is None or question.status != QuestionStatus.ACTIVE:
                logfire.warn(
                    "Answer to unavailable question", question_id=str(question_id)
                )
                raise NotFoundError("Question", str(question_id))

            now = utcnow()
            try:
                answer = Answer(
                    id=AnswerId(uuid4()),
                    question_id=question_id,
                    author_id=author_id,
                    content=content,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid answer", error=str(e))
                raise ValidationError.from_pydantic(e)

            saved = await self.answer_repository.save(answer)
            await self.question_repository.register_answer(question_id, at=now)

            logfire.info(
                "Answer created",
                answer_id=str(saved.id),
                question_id=str(question_id),
            )
            return saved

    async def edit_answer(
        self,
        answer_id: AnswerId,
        editor_id: UserId,
        content: str,
        reason: Optional[str] = None,
    ) -> Answer:
        """Replace an answer's content, keeping the previous revision.

        Submitting identical content leaves the answer and its history as
        they are.

        Args:
            answer_id: Answer ID
            editor_id: Editing user (must be the author)
            content: New content
            reason: Optional edit reason

        Returns:
            The edited answer

        Raises:
            NotFoundError: If the answer or its question does not exist or was
                deleted
            NotAuthorizedError: If the editor is not the author
            ValidationError: If the content or reason is invalid
        """
        with logfire.span(
            "answer_service.edit_answer",
            answer_id=str(answer_id),
            editor_id=str(editor_id),
        ):
            answer = await self.answer_repository.find_by_id(answer_id, for_update=True)
            if answer is None or answer.status == AnswerStatus.DELETED:
                raise NotFoundError("Answer", str(answer_id))

            question = await self.question_repository.find_by_id(answer.question_id)
            if question is None or question.is_deleted:
                raise NotFoundError("Question", str(answer.question_id))

            if answer.author_id != editor_id:
                logfire.warn(
                    "Unauthorized answer edit",
                    answer_id=str(answer_id),
                    editor_id=str(editor_id),
                )
                raise NotAuthorizedError("answer", str(answer_id), str(editor_id))

            if content.strip() == answer.content:
                return answer

            try:
                revised = answer.revise(
                    content=content,
                    reason=reason,
                    edited_at=utcnow(),
                    history_limit=self.settings.edit_history_limit,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid answer edit", error=str(e))
                raise ValidationError.from_pydantic(e)

            updated = await self.answer_repository.update(revised)
            logfire.info(
                "Answer edited",
                answer_id=str(answer_id),
                revisions=len(updated.edit_history),
            )
            return updated

    async def mark_best_answer(self, answer_id: AnswerId, requester_id: UserId) -> Answer:
        """Select the best answer of a question.

        The question row is locked for the rest of the transaction, so
        concurrent selections on the same question run one after another and
        exactly one best answer remains.

        Args:
            answer_id: Answer to mark
            requester_id: Requesting user (must be the question author)

        Returns:
            The marked answer

        Raises:
            NotFoundError: If the answer or its question does not exist
            ForbiddenError: If the requester did not ask the question
        """
        with logfire.span(
            "answer_service.mark_best_answer",
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            answer = await self.answer_repository.find_by_id(answer_id)
            if answer is None or answer.status == AnswerStatus.DELETED:
                raise NotFoundError("Answer", str(answer_id))

            question = await self.question_repository.find_by_id(
                answer.question_id, for_update=True
            )
            if question is None or question.is_deleted:
                raise NotFoundError("Question", str(answer.question_id))

            if question.author_id != requester_id:
                logfire.warn(
                    "Best answer chosen by non-author",
                    question_id=str(question.id),
                    requester_id=str(requester_id),
                )
                raise ForbiddenError(
                    "Only the question author can mark the best answer"
                )

            await self.answer_repository.mark_best(question.id, answer_id)
            await self.question_repository.set_best_answer(question.id, answer_id)

            logfire.info(
                "Best answer marked",
                question_id=str(question.id),
                answer_id=str(answer_id),
            )
            return answer.model_copy(update={"acceptance": AnswerAcceptance.BEST})
