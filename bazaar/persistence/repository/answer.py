"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Answer
from bazaar.domain.model.stats import AnswerStats
from bazaar.domain.repository import AnswerRepository
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    AnswerStatus,
    QuestionId,
    UserId,
)
from bazaar.persistence.mappers import answer_to_dict, row_to_answer
from bazaar.persistence.tables import answers_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, answer_id: AnswerId, for_update: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID, optionally locking the row."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_by_question(
        self,
        question_id: QuestionId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> List[Answer]:
        """Find the answers of a question, best first."""
        with logfire.span(
            "answer_repository.find_by_question", question_id=str(question_id)
        ):
            stmt = select(answers_table).where(
                answers_table.c.question_id == question_id
            )
            if status is not None:
                stmt = stmt.where(answers_table.c.status == status.value)
            stmt = stmt.order_by(
                desc(answers_table.c.acceptance == AnswerAcceptance.BEST.value),
                desc(answers_table.c.vote_score),
                desc(answers_table.c.created_at),
            )
            result = await self.session.execute(stmt)
            answers = [row_to_answer(row._asdict()) for row in result.fetchall()]
            logfire.debug("Found answers", count=len(answers))
            return answers

    async def find_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Answer]:
        """Find answers by a specific author, newest first."""
        stmt = select(answers_table).where(answers_table.c.author_id == author_id)
        if status is not None:
            stmt = stmt.where(answers_table.c.status == status.value)
        stmt = (
            stmt.order_by(desc(answers_table.c.created_at)).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def count_by_author(
        self,
        author_id: UserId,
        status: Optional[AnswerStatus] = AnswerStatus.ACTIVE,
    ) -> int:
        """Count answers by a specific author."""
        stmt = (
            select(func.count())
            .select_from(answers_table)
            .where(answers_table.c.author_id == author_id)
        )
        if status is not None:
            stmt = stmt.where(answers_table.c.status == status.value)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, answer: Answer) -> Answer:
        """Save a new answer."""
        stmt = insert(answers_table).values(**answer_to_dict(answer))
        await self.session.execute(stmt)
        await self.session.flush()
        logfire.info("Answer saved", answer_id=str(answer.id))
        return answer

    async def update(self, answer: Answer) -> Answer:
        """Persist edits to content, edit history and status."""
        answer_dict = answer_to_dict(answer)
        stmt = (
            update(answers_table)
            .where(answers_table.c.id == answer.id)
            .values(
                content=answer_dict["content"],
                status=answer_dict["status"],
                edit_history=answer_dict["edit_history"],
                last_edited_at=answer_dict["last_edited_at"],
                updated_at=answer_dict["updated_at"],
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return answer

    async def update_vote_score(self, answer_id: AnswerId, vote_score: int) -> None:
        """Store a recomputed vote score."""
        stmt = (
            update(answers_table)
            .where(answers_table.c.id == answer_id)
            .values(vote_score=vote_score)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_best(self, question_id: QuestionId, answer_id: AnswerId) -> None:
        """Make ``answer_id`` the only best answer of its question.

        The clear runs before the set so the partial unique index on best
        answers never sees two rows at once.
        """
        with logfire.span(
            "answer_repository.mark_best",
            question_id=str(question_id),
            answer_id=str(answer_id),
        ):
            await self.session.execute(
                update(answers_table)
                .where(
                    answers_table.c.question_id == question_id,
                    answers_table.c.id != answer_id,
                    answers_table.c.acceptance == AnswerAcceptance.BEST.value,
                )
                .values(acceptance=AnswerAcceptance.NORMAL.value)
            )
            await self.session.execute(
                update(answers_table)
                .where(answers_table.c.id == answer_id)
                .values(acceptance=AnswerAcceptance.BEST.value)
            )
            await self.session.flush()

    async def stats(self) -> AnswerStats:
        """Compute totals over active answers."""
        stmt = select(
            func.count(),
            func.count().filter(
                answers_table.c.acceptance == AnswerAcceptance.BEST.value
            ),
        ).where(answers_table.c.status == AnswerStatus.ACTIVE.value)
        total, best = (await self.session.execute(stmt)).one()
        return AnswerStats(total_answers=total, best_answers=best)
