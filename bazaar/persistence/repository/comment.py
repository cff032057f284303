"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Comment
from bazaar.domain.repository import CommentRepository
from bazaar.domain.value import AnswerId, CommentId
from bazaar.persistence.mappers import comment_to_dict, row_to_comment
from bazaar.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_answers(self, answer_ids: Sequence[AnswerId]) -> List[Comment]:
        """Find the comments of several answers in one query, oldest first."""
        if not answer_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.answer_id.in_(answer_ids))
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_vote_score(self, comment_id: CommentId, vote_score: int) -> None:
        """Store a recomputed vote score."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(vote_score=vote_score)
        )
        await self.session.execute(stmt)
        await self.session.flush()
