"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from bazaar.domain.model.vote import Vote, VoteOutcome, VoteTally
from bazaar.domain.value import UserId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def toggle(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> VoteOutcome:
        """Cast a toggle vote.

        Removes the user's existing vote on the item, then records
        ``vote_type`` unless it equals the vote just removed. Both steps and
        the tally returned happen in the caller's transaction, so concurrent
        toggles from different users never overwrite each other.

        Args:
            user_id: The voter's ID
            votable_type: Type of item (question, answer or comment)
            votable_id: ID of the item
            vote_type: Requested vote direction

        Returns:
            The voter's resulting vote (None when retracted) and the new tally
        """
        pass

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count upvotes and downvotes on an item.

        Args:
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            Current vote tally
        """
        pass
