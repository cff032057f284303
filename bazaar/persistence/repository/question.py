"""PostgreSQL implementation of Question repository."""

from datetime import datetime, timedelta
from typing import Any, List, Optional
from uuid import uuid4

import logfire
from sqlalchemy import (
    ColumnElement,
    Select,
    Text,
    delete,
    desc,
    exists,
    func,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Question, QuestionFlag
from bazaar.domain.model.stats import CategoryCount, QuestionStats
from bazaar.domain.repository.question import QuestionFilter, QuestionRepository
from bazaar.domain.value import (
    AnswerId,
    QuestionCategory,
    QuestionId,
    QuestionSortOrder,
    QuestionStatus,
    UserId,
)
from bazaar.persistence.mappers import (
    question_flag_to_dict,
    question_to_dict,
    row_to_question,
    row_to_question_flag,
)
from bazaar.persistence.tables import (
    question_flags_table,
    question_views_table,
    questions_table,
)


def _conditions(criteria: QuestionFilter) -> List[ColumnElement[bool]]:
    """Translate a filter into WHERE clauses."""
    conditions: List[ColumnElement[bool]] = []
    if criteria.status is not None:
        conditions.append(questions_table.c.status == criteria.status.value)
    if criteria.category is not None:
        conditions.append(questions_table.c.category == criteria.category.value)
    if criteria.author_id is not None:
        conditions.append(questions_table.c.author_id == criteria.author_id)
    if criteria.tags:
        conditions.append(questions_table.c.tags.overlap(criteria.tags))
    if criteria.search:
        needle = criteria.search
        tag_text = func.array_to_string(questions_table.c.tags, " ", type_=Text)
        # autoescape keeps % and _ in the needle literal
        conditions.append(
            or_(
                questions_table.c.title.icontains(needle, autoescape=True),
                questions_table.c.content.icontains(needle, autoescape=True),
                tag_text.icontains(needle, autoescape=True),
            )
        )
    return conditions


def _order(stmt: Select[Any], sort: QuestionSortOrder) -> Select[Any]:
    if sort == QuestionSortOrder.POPULAR:
        return stmt.order_by(
            desc(questions_table.c.vote_score), desc(questions_table.c.view_count)
        )
    if sort == QuestionSortOrder.MOST_ANSWERED:
        return stmt.order_by(
            desc(questions_table.c.answer_count), desc(questions_table.c.created_at)
        )
    if sort == QuestionSortOrder.NEWEST:
        return stmt.order_by(desc(questions_table.c.created_at))
    return stmt.order_by(
        desc(questions_table.c.is_pinned), desc(questions_table.c.last_activity)
    )


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find a question by ID, optionally locking the row."""
        with logfire.span(
            "question_repository.find_by_id",
            question_id=str(question_id),
            for_update=for_update,
        ):
            stmt = select(questions_table).where(questions_table.c.id == question_id)
            if for_update:
                stmt = stmt.with_for_update()
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Question not found", question_id=str(question_id))
                return None
            return row_to_question(row._asdict())

    async def find_all(
        self,
        criteria: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering, sorting and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            category=criteria.category.value if criteria.category else None,
            limit=limit,
            offset=offset,
        ):
            stmt = select(questions_table).where(*_conditions(criteria))
            stmt = _order(stmt, sort).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            questions = [row_to_question(row._asdict()) for row in result.fetchall()]
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(self, criteria: QuestionFilter) -> int:
        """Count questions matching the given filter."""
        stmt = (
            select(func.count())
            .select_from(questions_table)
            .where(*_conditions(criteria))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Save a new question."""
        with logfire.span("question_repository.save", question_id=str(question.id)):
            stmt = insert(questions_table).values(**question_to_dict(question))
            await self.session.execute(stmt)
            await self.session.flush()
            logfire.info("Question saved", question_id=str(question.id))
            return question

    async def update(self, question: Question) -> Question:
        """Persist edits; counters are left untouched."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question.id)
            .values(
                title=question.title,
                content=question.content,
                category=question.category.value,
                tags=list(question.tags),
                status=question.status.value,
                is_pinned=question.is_pinned,
                last_activity=question.last_activity,
                updated_at=question.updated_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return question

    async def update_vote_score(
        self, question_id: QuestionId, vote_score: int, last_activity: datetime
    ) -> None:
        """Store a recomputed vote score and bump last activity."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(vote_score=vote_score, last_activity=last_activity)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def register_answer(self, question_id: QuestionId, at: datetime) -> None:
        """Atomically count a new answer and bump last activity."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(answer_count=questions_table.c.answer_count + 1, last_activity=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_best_answer(
        self, question_id: QuestionId, answer_id: AnswerId
    ) -> None:
        """Point the question at its best answer."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(best_answer_id=answer_id)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def record_view(
        self,
        question_id: QuestionId,
        viewer_id: UserId,
        viewed_at: datetime,
        window: timedelta,
        history_limit: int,
    ) -> bool:
        """Count a view unless the viewer was already counted within ``window``."""
        with logfire.span(
            "question_repository.record_view",
            question_id=str(question_id),
            viewer_id=str(viewer_id),
        ):
            recent = select(
                exists().where(
                    question_views_table.c.question_id == question_id,
                    question_views_table.c.viewer_id == viewer_id,
                    question_views_table.c.viewed_at > viewed_at - window,
                )
            )
            if (await self.session.execute(recent)).scalar():
                logfire.debug("View already counted", question_id=str(question_id))
                return False

            await self.session.execute(
                insert(question_views_table).values(
                    id=uuid4(),
                    question_id=question_id,
                    viewer_id=viewer_id,
                    viewed_at=viewed_at,
                )
            )
            await self.session.execute(
                update(questions_table)
                .where(questions_table.c.id == question_id)
                .values(view_count=questions_table.c.view_count + 1)
            )

            # Keep only the newest history_limit entries
            newest = (
                select(question_views_table.c.id)
                .where(question_views_table.c.question_id == question_id)
                .order_by(desc(question_views_table.c.viewed_at))
                .limit(history_limit)
            )
            await self.session.execute(
                delete(question_views_table).where(
                    question_views_table.c.question_id == question_id,
                    question_views_table.c.id.not_in(newest.scalar_subquery()),
                )
            )
            await self.session.flush()
            return True

    async def add_flag(self, flag: QuestionFlag) -> QuestionFlag:
        """Store a moderation flag."""
        stmt = insert(question_flags_table).values(
            id=uuid4(), **question_flag_to_dict(flag)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return flag

    async def find_flags(self, question_id: QuestionId) -> List[QuestionFlag]:
        """List moderation flags filed against a question, oldest first."""
        stmt = (
            select(question_flags_table)
            .where(question_flags_table.c.question_id == question_id)
            .order_by(question_flags_table.c.flagged_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_question_flag(row._asdict()) for row in result.fetchall()]

    async def stats(self) -> QuestionStats:
        """Compute totals over all non-deleted questions."""
        with logfire.span("question_repository.stats"):
            not_deleted = questions_table.c.status != QuestionStatus.DELETED.value
            totals_stmt = select(
                func.count(),
                func.count().filter(
                    questions_table.c.status == QuestionStatus.ACTIVE.value
                ),
                func.count().filter(questions_table.c.answer_count > 0),
                func.coalesce(func.sum(questions_table.c.view_count), 0),
                func.coalesce(func.sum(questions_table.c.vote_score), 0),
            ).where(not_deleted)
            total, active, answered, views, votes = (
                await self.session.execute(totals_stmt)
            ).one()

            count_col = func.count().label("count")
            breakdown_stmt = (
                select(questions_table.c.category, count_col)
                .where(questions_table.c.status == QuestionStatus.ACTIVE.value)
                .group_by(questions_table.c.category)
                .order_by(desc(count_col), questions_table.c.category)
            )
            breakdown = [
                CategoryCount(category=QuestionCategory(category), count=count)
                for category, count in (await self.session.execute(breakdown_stmt)).all()
            ]

            return QuestionStats(
                total_questions=total,
                active_questions=active,
                answered_questions=answered,
                total_views=int(views),
                total_votes=int(votes),
                category_breakdown=breakdown,
            )
