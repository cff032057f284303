"""Vote ledger.

Each (user, target) pair holds at most one vote row, and the row carries its
direction. That makes "in both the upvote and downvote set" unrepresentable.
Casting a vote is a toggle: repeating the current vote retracts it, casting
the opposite one replaces it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, computed_field

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import UserId, VotableType, VoteId, VoteType
from bazaar.domain.value.common import ValueObject


class Vote(DomainModel):
    """A user's current vote on a question, answer or comment."""

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # QuestionId, AnswerId or CommentId (all UUIDs)
    vote_type: VoteType = VoteType.UPVOTE
    created_at: datetime = Field(default_factory=utcnow)


class VoteTally(ValueObject):
    """Vote counts of a single target."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @computed_field
    @property
    def score(self) -> int:
        """Net score; comments never hold downvotes so this is |upvotes| there."""
        return self.upvotes - self.downvotes


class VoteOutcome(ValueObject):
    """Ledger state for one voter and target right after a toggle."""

    vote: Optional[VoteType]
    tally: VoteTally


def resolve_toggle(
    current: Optional[VoteType], requested: VoteType
) -> Optional[VoteType]:
    """Vote a user holds after casting ``requested`` over ``current``.

    >>> resolve_toggle(None, VoteType.UPVOTE)
    <VoteType.UPVOTE: 'upvote'>
    >>> resolve_toggle(VoteType.UPVOTE, VoteType.UPVOTE) is None
    True
    >>> resolve_toggle(VoteType.UPVOTE, VoteType.DOWNVOTE)
    <VoteType.DOWNVOTE: 'downvote'>
    """
    if current == requested:
        return None
    return requested
