"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID, uuid4

from bazaar.domain.model.vote import Vote, VoteOutcome, VoteTally, resolve_toggle
from bazaar.domain.repository.vote import VoteRepository
from bazaar.domain.value import UserId, VotableType, VoteId, VoteType

VoteKey = tuple[UserId, VotableType, UUID]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by (user, votable) so a voter holds at most one vote per
    item. Toggles never await mid-way, which keeps them atomic on one loop.
    """

    def __init__(self) -> None:
        self._votes: dict[VoteKey, Vote] = {}

    async def toggle(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> VoteOutcome:
        """Cast a toggle vote."""
        key = (user_id, votable_type, UUID(str(votable_id)))
        removed = self._votes.pop(key, None)
        current = resolve_toggle(removed.vote_type if removed else None, vote_type)
        if current is not None:
            self._votes[key] = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                votable_type=votable_type,
                votable_id=key[2],
                vote_type=current,
            )
        return VoteOutcome(vote=current, tally=self._tally(votable_type, key[2]))

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self._votes.get((user_id, votable_type, UUID(str(votable_id))))

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in votable_uuids
        ]

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count upvotes and downvotes on an item."""
        return self._tally(votable_type, UUID(str(votable_id)))

    def _tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        types = [
            v.vote_type
            for v in self._votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]
        return VoteTally(
            upvotes=types.count(VoteType.UPVOTE),
            downvotes=types.count(VoteType.DOWNVOTE),
        )
