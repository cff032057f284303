"""PostgreSQL implementation of SupportQuery repository."""

from typing import List, Optional

import logfire
from sqlalchemy import ColumnElement, delete, desc, func, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import SupportQuery
from bazaar.domain.model.stats import SupportQueryStats
from bazaar.domain.repository import SupportQueryFilter, SupportQueryRepository
from bazaar.domain.value import (
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
)
from bazaar.persistence.mappers import row_to_support_query, support_query_to_dict
from bazaar.persistence.tables import support_queries_table


def _conditions(criteria: SupportQueryFilter) -> List[ColumnElement[bool]]:
    """Translate a filter into WHERE clauses."""
    table = support_queries_table
    conditions: List[ColumnElement[bool]] = []
    if criteria.user_id is not None:
        conditions.append(table.c.user_id == criteria.user_id)
    if criteria.status is not None:
        conditions.append(table.c.status == criteria.status.value)
    if criteria.category is not None:
        conditions.append(table.c.category == criteria.category.value)
    if criteria.priority is not None:
        conditions.append(table.c.priority == criteria.priority.value)
    if criteria.assigned_to is not None:
        conditions.append(table.c.assigned_to == criteria.assigned_to)
    if criteria.search:
        conditions.append(
            or_(
                *(
                    column.icontains(criteria.search, autoescape=True)
                    for column in (
                        table.c.subject,
                        table.c.message,
                        table.c.name,
                        table.c.email,
                    )
                )
            )
        )
    return conditions


class PostgresSupportQueryRepository(SupportQueryRepository):
    """PostgreSQL implementation of SupportQueryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, query_id: SupportQueryId) -> Optional[SupportQuery]:
        """Find a query by ID."""
        stmt = select(support_queries_table).where(
            support_queries_table.c.id == query_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_support_query(row._asdict()) if row else None

    async def find_all(
        self, criteria: SupportQueryFilter, limit: int = 10, offset: int = 0
    ) -> List[SupportQuery]:
        """Find queries matching a filter, newest first."""
        with logfire.span(
            "support_query_repository.find_all",
            status=criteria.status.value if criteria.status else None,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(support_queries_table)
                .where(*_conditions(criteria))
                .order_by(desc(support_queries_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_support_query(row._asdict()) for row in result.fetchall()]

    async def count(self, criteria: SupportQueryFilter) -> int:
        """Count queries matching a filter."""
        stmt = (
            select(func.count())
            .select_from(support_queries_table)
            .where(*_conditions(criteria))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, query: SupportQuery) -> SupportQuery:
        """Save a query (create or update)."""
        query_dict = support_query_to_dict(query)
        stmt = pg_insert(support_queries_table).values(**query_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[support_queries_table.c.id],
            set_={k: v for k, v in query_dict.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return query

    async def delete(self, query_id: SupportQueryId) -> bool:
        """Delete a query (hard delete)."""
        stmt = delete(support_queries_table).where(
            support_queries_table.c.id == query_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def stats(self) -> SupportQueryStats:
        """Compute totals over all queries."""
        with logfire.span("support_query_repository.stats"):
            table = support_queries_table
            status_stmt = select(table.c.status, func.count()).group_by(table.c.status)
            by_status = {
                SupportStatus(status): count
                for status, count in (await self.session.execute(status_stmt)).all()
            }

            category_stmt = select(table.c.category, func.count()).group_by(
                table.c.category
            )
            by_category = {
                SupportCategory(category): count
                for category, count in (await self.session.execute(category_stmt)).all()
            }

            priority_stmt = select(table.c.priority, func.count()).group_by(
                table.c.priority
            )
            by_priority = {
                SupportPriority(priority): count
                for priority, count in (await self.session.execute(priority_stmt)).all()
            }

            return SupportQueryStats(
                total_queries=sum(by_status.values()),
                pending_queries=by_status.get(SupportStatus.PENDING, 0),
                in_progress_queries=by_status.get(SupportStatus.IN_PROGRESS, 0),
                resolved_queries=by_status.get(SupportStatus.RESOLVED, 0),
                closed_queries=by_status.get(SupportStatus.CLOSED, 0),
                urgent_queries=by_priority.get(SupportPriority.URGENT, 0),
                by_category=by_category,
                by_priority=by_priority,
            )
