"""Vote domain service."""

from uuid import UUID

import logfire

from bazaar.domain.error import NotFoundError, SelfVoteError
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.vote import VoteOutcome
from bazaar.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
    VoteRepository,
)
from bazaar.domain.value import (
    AnswerId,
    AnswerStatus,
    CommentId,
    QuestionId,
    UserId,
    VotableType,
    VoteType,
)

from .base import Service


class VoteService(Service):
    """Domain service for toggle votes on questions, answers and comments.

    Every vote locks its target row first, so the ledger toggle and the
    score written back to the target form one serialized step per target.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            question_repository: Question repository
            answer_repository: Answer repository
            comment_repository: Comment repository
        """
        self.vote_repository = vote_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository

    async def vote_question(
        self, question_id: QuestionId, voter_id: UserId, vote_type: VoteType
    ) -> VoteOutcome:
        """Toggle a vote on a question.

        Args:
            question_id: Question ID
            voter_id: Voting user ID
            vote_type: Requested vote direction

        Returns:
            The voter's resulting vote and the question's tally

        Raises:
            NotFoundError: If the question does not exist or was deleted
            SelfVoteError: If the voter wrote the question
        """
        with logfire.span(
            "vote_service.vote_question",
            question_id=str(question_id),
            voter_id=str(voter_id),
            vote_type=vote_type.value,
        ):
            question = await self.question_repository.find_by_id(
                question_id, for_update=True
            )
            if question is None or question.is_deleted:
                logfire.warn("Vote on non-existent question", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))

            if question.author_id == voter_id:
                logfire.warn("Self-vote attempt on question", question_id=str(question_id))
                raise SelfVoteError("question")

            outcome = await self.vote_repository.toggle(
                voter_id, VotableType.QUESTION, UUID(str(question_id)), vote_type
            )
            await self.question_repository.update_vote_score(
                question_id, outcome.tally.score, last_activity=utcnow()
            )

            logfire.info(
                "Question vote toggled",
                question_id=str(question_id),
                vote=outcome.vote.value if outcome.vote else None,
                score=outcome.tally.score,
            )
            return outcome

    async def vote_answer(
        self, answer_id: AnswerId, voter_id: UserId, vote_type: VoteType
    ) -> VoteOutcome:
        """Toggle a vote on an answer.

        Args:
            answer_id: Answer ID
            voter_id: Voting user ID
            vote_type: Requested vote direction

        Returns:
            The voter's resulting vote and the answer's tally

        Raises:
            NotFoundError: If the answer does not exist or was deleted, or its
                question was deleted
            SelfVoteError: If the voter wrote the answer
        """
        with logfire.span(
            "vote_service.vote_answer",
            answer_id=str(answer_id),
            voter_id=str(voter_id),
            vote_type=vote_type.value,
        ):
            answer = await self.answer_repository.find_by_id(answer_id, for_update=True)
            if answer is None or answer.status == AnswerStatus.DELETED:
                logfire.warn("Vote on non-existent answer", answer_id=str(answer_id))
                raise NotFoundError("Answer", str(answer_id))

            await self._require_live_question(answer.question_id)

            if answer.author_id == voter_id:
                logfire.warn("Self-vote attempt on answer", answer_id=str(answer_id))
                raise SelfVoteError("answer")

            outcome = await self.vote_repository.toggle(
                voter_id, VotableType.ANSWER, UUID(str(answer_id)), vote_type
            )
            await self.answer_repository.update_vote_score(
                answer_id, outcome.tally.score
            )

            logfire.info(
                "Answer vote toggled",
                answer_id=str(answer_id),
                vote=outcome.vote.value if outcome.vote else None,
                score=outcome.tally.score,
            )
            return outcome

    async def vote_comment(
        self, answer_id: AnswerId, comment_id: CommentId, voter_id: UserId
    ) -> VoteOutcome:
        """Toggle an upvote on a comment.

        Comments only take upvotes and authors may upvote their own comments.

        Args:
            answer_id: Answer the comment belongs to
            comment_id: Comment ID
            voter_id: Voting user ID

        Returns:
            The voter's resulting vote and the comment's tally

        Raises:
            NotFoundError: If the answer, comment or question is missing or
                deleted, or the comment belongs to another answer
        """
        with logfire.span(
            "vote_service.vote_comment",
            answer_id=str(answer_id),
            comment_id=str(comment_id),
            voter_id=str(voter_id),
        ):
            answer = await self.answer_repository.find_by_id(answer_id)
            if answer is None or answer.status == AnswerStatus.DELETED:
                logfire.warn("Comment vote on non-existent answer", answer_id=str(answer_id))
                raise NotFoundError("Answer", str(answer_id))

            await self._require_live_question(answer.question_id)

            comment = await self.comment_repository.find_by_id(
                comment_id, for_update=True
            )
            if comment is None or comment.answer_id != answer_id:
                logfire.warn("Vote on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            outcome = await self.vote_repository.toggle(
                voter_id, VotableType.COMMENT, UUID(str(comment_id)), VoteType.UPVOTE
            )
            await self.comment_repository.update_vote_score(
                comment_id, outcome.tally.upvotes
            )

            logfire.info(
                "Comment vote toggled",
                comment_id=str(comment_id),
                vote=outcome.vote.value if outcome.vote else None,
                score=outcome.tally.upvotes,
            )
            return outcome

    async def _require_live_question(self, question_id: QuestionId) -> None:
        question = await self.question_repository.find_by_id(question_id)
        if question is None or question.is_deleted:
            logfire.warn("Vote inside deleted question", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))

    async def get_user_votes(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: list[UUID],
    ) -> dict[UUID, VoteType]:
        """Look up a user's votes on several items of one type.

        Args:
            user_id: User ID
            votable_type: Type of the items
            votable_ids: Item IDs to check

        Returns:
            Mapping of item ID to vote direction for the items voted on
        """
        if not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        return {UUID(str(vote.votable_id)): vote.vote_type for vote in votes}
