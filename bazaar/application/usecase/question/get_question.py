"""Get question use case."""

from collections import defaultdict
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from bazaar.domain.repository import AnswerRepository, CommentRepository
from bazaar.domain.service import QuestionService, VoteService
from bazaar.domain.value import QuestionId, UserId, VotableType, VoteType

from .views import AnswerItem, CommentItem, QuestionItem


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str  # UUID string
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionResponse(BaseModel):
    """Question with its answers, comments and the viewer's votes."""

    question: QuestionItem
    answers: list[AnswerItem]
    user_vote: Optional[VoteType] = None


class GetQuestionUseCase:
    """Use case for reading a question thread.

    Reading counts as a view for authenticated viewers (deduplicated per
    viewer inside the configured window).
    """

    def __init__(
        self,
        question_service: QuestionService,
        vote_service: VoteService,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            vote_service: Vote domain service for the viewer's votes
            answer_repository: Answer repository
            comment_repository: Comment repository
        """
        self.question_service = question_service
        self.vote_service = vote_service
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Args:
            request: Question ID and optional viewer

        Returns:
            The question, its active answers (best first, then by score,
            then newest) with comments, and the viewer's votes

        Raises:
            NotFoundError: If the question does not exist or was deleted
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        question = await self.question_service.view_question(
            QuestionId(UUID(request.question_id)), viewer_id
        )

        answers = await self.answer_repository.find_by_question(question.id)
        comments = await self.comment_repository.find_by_answers(
            [answer.id for answer in answers]
        )

        question_votes: dict[UUID, VoteType] = {}
        answer_votes: dict[UUID, VoteType] = {}
        comment_votes: dict[UUID, VoteType] = {}
        if viewer_id is not None:
            # Batch queries to fetch all votes at once (avoid N+1)
            question_votes = await self.vote_service.get_user_votes(
                viewer_id, VotableType.QUESTION, [UUID(str(question.id))]
            )
            answer_votes = await self.vote_service.get_user_votes(
                viewer_id, VotableType.ANSWER, [UUID(str(a.id)) for a in answers]
            )
            comment_votes = await self.vote_service.get_user_votes(
                viewer_id, VotableType.COMMENT, [UUID(str(c.id)) for c in comments]
            )

        comments_by_answer: dict[UUID, list[CommentItem]] = defaultdict(list)
        for comment in comments:
            comments_by_answer[UUID(str(comment.answer_id))].append(
                CommentItem.from_domain(
                    comment, user_vote=comment_votes.get(UUID(str(comment.id)))
                )
            )

        logfire.debug(
            "Question thread loaded",
            question_id=str(question.id),
            answers=len(answers),
            comments=len(comments),
        )

        return GetQuestionResponse(
            question=QuestionItem.from_domain(question),
            answers=[
                AnswerItem.from_domain(
                    answer,
                    comments=comments_by_answer.get(UUID(str(answer.id)), []),
                    user_vote=answer_votes.get(UUID(str(answer.id))),
                )
                for answer in answers
            ],
            user_vote=question_votes.get(UUID(str(question.id))),
        )
