"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy import ColumnElement, and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Vote, VoteOutcome, VoteTally, resolve_toggle
from bazaar.domain.model.common import utcnow
from bazaar.domain.repository import VoteRepository
from bazaar.domain.value import UserId, VotableType, VoteType
from bazaar.persistence.mappers import row_to_vote
from bazaar.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The (user, votable) unique constraint keeps a single row per voter and
    target, so a vote can never be up and down at the same time.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _match(
        self, user_id: UserId, votable_type: VotableType, votable_id: UUID
    ) -> ColumnElement[bool]:
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    async def toggle(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> VoteOutcome:
        """Cast a toggle vote inside the caller's transaction."""
        with logfire.span(
            "vote_repository.toggle",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            vote_type=vote_type.value,
        ):
            removed = await self.session.execute(
                delete(votes_table)
                .where(self._match(user_id, votable_type, votable_id))
                .returning(votes_table.c.vote_type)
            )
            previous = removed.scalar_one_or_none()
            current = resolve_toggle(
                VoteType(previous) if previous else None, vote_type
            )

            if current is not None:
                stmt = (
                    pg_insert(votes_table)
                    .values(
                        id=uuid4(),
                        user_id=user_id,
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                        vote_type=current.value,
                        created_at=utcnow(),
                    )
                    .on_conflict_do_update(
                        constraint="unique_vote",
                        set_={"vote_type": current.value},
                    )
                )
                await self.session.execute(stmt)

            await self.session.flush()
            tally = await self.tally(votable_type, votable_id)
            logfire.debug(
                "Vote toggled",
                previous=previous,
                current=current.value if current else None,
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
            )
            return VoteOutcome(vote=current, tally=tally)

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            self._match(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_vote(row._asdict()) for row in rows]

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count upvotes and downvotes on an item."""
        stmt = (
            select(votes_table.c.vote_type, func.count())
            .where(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
            .group_by(votes_table.c.vote_type)
        )
        result = await self.session.execute(stmt)
        counts = {VoteType(vote_type): count for vote_type, count in result.all()}
        return VoteTally(
            upvotes=counts.get(VoteType.UPVOTE, 0),
            downvotes=counts.get(VoteType.DOWNVOTE, 0),
        )
