"""Cast vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.error import ValidationError
from bazaar.domain.service import VoteService
from bazaar.domain.value import (
    AnswerId,
    CommentId,
    QuestionId,
    UserId,
    VotableType,
    VoteType,
)


class CastVoteRequest(BaseModel):
    """Cast vote request.

    Comment votes also carry the answer the comment belongs to, and are
    always upvotes.
    """

    votable_type: VotableType
    votable_id: str  # UUID string
    voter_id: str  # User ID from authenticated user
    vote_type: VoteType = VoteType.UPVOTE
    answer_id: Optional[str] = None  # Parent answer for comment votes


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    user_vote: Optional[VoteType]  # None when the vote was retracted
    upvotes: int
    downvotes: int
    vote_score: int


class CastVoteUseCase:
    """Use case for toggling a vote on a question, answer or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The voter's resulting vote and the target's counts

        Raises:
            NotFoundError: If the target does not exist
            SelfVoteError: If the voter wrote the question or answer
        """
        voter_id = UserId(UUID(request.voter_id))
        target = UUID(request.votable_id)

        if request.votable_type == VotableType.QUESTION:
            outcome = await self.vote_service.vote_question(
                QuestionId(target), voter_id, request.vote_type
            )
        elif request.votable_type == VotableType.ANSWER:
            outcome = await self.vote_service.vote_answer(
                AnswerId(target), voter_id, request.vote_type
            )
        else:  # VotableType.COMMENT
            if request.answer_id is None:
                raise ValidationError("Comment votes require the parent answer ID")
            outcome = await self.vote_service.vote_comment(
                AnswerId(UUID(request.answer_id)), CommentId(target), voter_id
            )

        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            user_vote=outcome.vote,
            upvotes=outcome.tally.upvotes,
            downvotes=outcome.tally.downvotes,
            vote_score=(
                outcome.tally.upvotes
                if request.votable_type == VotableType.COMMENT
                else outcome.tally.score
            ),
        )
