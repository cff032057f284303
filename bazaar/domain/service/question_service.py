"""Question domain service."""

from datetime import timedelta
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bazaar.config import CommunitySettings
from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.question import Question, QuestionFlag
from bazaar.domain.model.stats import AnswerStats, QuestionStats
from bazaar.domain.repository import AnswerRepository, QuestionRepository
from bazaar.domain.value import (
    FlagReason,
    Principal,
    QuestionCategory,
    QuestionId,
    QuestionStatus,
    UserId,
)

from .base import Service


class QuestionService(Service):
    """Domain service for the question lifecycle."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        community_settings: CommunitySettings,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            community_settings: Community configuration
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.settings = community_settings

    async def create_question(
        self,
        author_id: UserId,
        title: str,
        content: str,
        category: QuestionCategory = QuestionCategory.GENERAL,
        tags: Optional[list[str]] = None,
    ) -> Question:
        """Create an active question.

        Args:
            author_id: Author user ID
            title: Question title (1-300 characters)
            content: Question body (1-5000 characters)
            category: Question category
            tags: Free-form tags (each at most 50 characters)

        Returns:
            Created question

        Raises:
            ValidationError: If a field is empty or too long
        """
        with logfire.span(
            "question_service.create_question",
            author_id=str(author_id),
            category=category.value,
        ):
            now = utcnow()
            try:
                question = Question(
                    id=QuestionId(uuid4()),
                    title=title,
                    content=content,
                    author_id=author_id,
                    category=category,
                    tags=tags or [],
                    status=QuestionStatus.ACTIVE,
                    last_activity=now,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid question", error=str(e))
                raise ValidationError.from_pydantic(e)

            saved = await self.question_repository.save(question)
            logfire.info("Question created", question_id=str(saved.id))
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question that has not been deleted.

        Args:
            question_id: Question ID

        Returns:
            The question

        Raises:
            NotFoundError: If the question does not exist or was deleted
        """
        question = await self.question_repository.find_by_id(question_id)
        if question is None or question.is_deleted:
            logfire.warn("Question not found", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))
        return question

    async def view_question(
        self, question_id: QuestionId, viewer_id: Optional[UserId]
    ) -> Question:
        """Get a question and count the view.

        A viewer is counted at most once per deduplication window.

        Args:
            question_id: Question ID
            viewer_id: Viewing user (anonymous views are not counted)

        Returns:
            The question with its up-to-date view count

        Raises:
            NotFoundError: If the question does not exist or was deleted
        """
        with logfire.span(
            "question_service.view_question",
            question_id=str(question_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            question = await self.get_question(question_id)
            if viewer_id is None:
                return question

            counted = await self.question_repository.record_view(
                question_id,
                viewer_id,
                viewed_at=utcnow(),
                window=timedelta(hours=self.settings.view_dedup_hours),
                history_limit=self.settings.view_history_limit,
            )
            if counted:
                logfire.debug("Question view counted", question_id=str(question_id))
                return question.model_copy(
                    update={"view_count": question.view_count + 1}
                )
            return question

    async def update_question(
        self,
        question_id: QuestionId,
        editor_id: UserId,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> Question:
        """Edit the title, content or tags of a question.

        Args:
            question_id: Question ID
            editor_id: Editing user ID (must be the author)
            title: New title, unchanged if None
            content: New content, unchanged if None
            tags: New tags, unchanged if None

        Returns:
            Updated question

        Raises:
            NotFoundError: If the question does not exist or was deleted
            NotAuthorizedError: If the editor is not the author
            ValidationError: If a new field value is invalid
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            editor_id=str(editor_id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != editor_id:
                logfire.warn(
                    "Unauthorized question edit",
                    question_id=str(question_id),
                    editor_id=str(editor_id),
                )
                raise NotAuthorizedError("question", str(question_id), str(editor_id))

            changes: dict[str, object] = {"updated_at": utcnow()}
            if title is not None:
                changes["title"] = title
            if content is not None:
                changes["content"] = content
            if tags is not None:
                changes["tags"] = tags

            try:
                edited = question.evolve(**changes)
            except PydanticValidationError as e:
                logfire.warn("Invalid question edit", error=str(e))
                raise ValidationError.from_pydantic(e)

            updated = await self.question_repository.update(edited)
            logfire.info("Question updated", question_id=str(question_id))
            return updated

    async def delete_question(
        self, question_id: QuestionId, requester: Principal
    ) -> Question:
        """Soft-delete a question.

        Args:
            question_id: Question ID
            requester: The author or an administrator

        Returns:
            The deleted question

        Raises:
            NotFoundError: If the question does not exist or was deleted
            NotAuthorizedError: If the requester is neither author nor admin
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            requester_id=str(requester.id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != requester.id and not requester.is_admin:
                logfire.warn(
                    "Unauthorized question delete",
                    question_id=str(question_id),
                    requester_id=str(requester.id),
                )
                raise NotAuthorizedError(
                    "question", str(question_id), str(requester.id)
                )

            deleted = await self.question_repository.update(
                question.evolve(status=QuestionStatus.DELETED, updated_at=utcnow())
            )
            logfire.info("Question deleted", question_id=str(question_id))
            return deleted

    async def change_status(
        self, question_id: QuestionId, moderator: Principal, status: QuestionStatus
    ) -> Question:
        """Move a question through its moderation states.

        Args:
            question_id: Question ID
            moderator: Administrator performing the change
            status: Target status

        Returns:
            Updated question

        Raises:
            ForbiddenError: If the moderator is not an administrator
            NotFoundError: If the question does not exist
            InvalidOperationError: If the transition is not allowed
        """
        with logfire.span(
            "question_service.change_status",
            question_id=str(question_id),
            status=status.value,
        ):
            if not moderator.is_admin:
                raise ForbiddenError("Admin access required")

            question = await self.question_repository.find_by_id(question_id)
            if question is None:
                raise NotFoundError("Question", str(question_id))

            if not question.status.can_transition_to(status):
                logfire.warn(
                    "Invalid question status transition",
                    question_id=str(question_id),
                    current=question.status.value,
                    target=status.value,
                )
                raise InvalidOperationError(
                    f"Cannot move question from {question.status.value} to {status.value}"
                )

            updated = await self.question_repository.update(
                question.evolve(status=status, updated_at=utcnow())
            )
            logfire.info(
                "Question status changed",
                question_id=str(question_id),
                status=status.value,
            )
            return updated

    async def flag_question(
        self,
        question_id: QuestionId,
        reporter_id: UserId,
        reason: FlagReason,
        description: Optional[str] = None,
    ) -> QuestionFlag:
        """File a moderation flag against a question.

        Flagging never changes the question's status by itself; moving it to
        pending review is left to an administrator.

        Args:
            question_id: Question ID
            reporter_id: Reporting user ID
            reason: Flag reason
            description: Optional free-text details

        Returns:
            The stored flag

        Raises:
            NotFoundError: If the question does not exist or was deleted
            ValidationError: If the description is too long
        """
        with logfire.span(
            "question_service.flag_question",
            question_id=str(question_id),
            reason=reason.value,
        ):
            await self.get_question(question_id)
            try:
                flag = QuestionFlag(
                    question_id=question_id,
                    reporter_id=reporter_id,
                    reason=reason,
                    description=description,
                    flagged_at=utcnow(),
                )
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e)

            saved = await self.question_repository.add_flag(flag)
            logfire.info(
                "Question flagged",
                question_id=str(question_id),
                reporter_id=str(reporter_id),
                reason=reason.value,
            )
            return saved

    async def community_stats(
        self, requester: Principal
    ) -> tuple[QuestionStats, AnswerStats]:
        """Compute community-wide totals.

        Args:
            requester: Administrator asking for the statistics

        Returns:
            Question and answer statistics

        Raises:
            ForbiddenError: If the requester is not an administrator
        """
        with logfire.span("question_service.community_stats"):
            if not requester.is_admin:
                raise ForbiddenError("Admin access required")

            question_stats = await self.question_repository.stats()
            answer_stats = await self.answer_repository.stats()
            return question_stats, answer_stats
