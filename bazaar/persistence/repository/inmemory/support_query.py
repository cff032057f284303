"""In-memory support query repository for testing."""

from collections import Counter
from typing import Optional

from bazaar.domain.model.stats import SupportQueryStats
from bazaar.domain.model.support_query import SupportQuery
from bazaar.domain.repository.support_query import (
    SupportQueryFilter,
    SupportQueryRepository,
)
from bazaar.domain.value import SupportPriority, SupportQueryId, SupportStatus


def _matches(query: SupportQuery, criteria: SupportQueryFilter) -> bool:
    if criteria.user_id is not None and query.user_id != criteria.user_id:
        return False
    if criteria.status is not None and query.status != criteria.status:
        return False
    if criteria.category is not None and query.category != criteria.category:
        return False
    if criteria.priority is not None and query.priority != criteria.priority:
        return False
    if criteria.assigned_to is not None and query.assigned_to != criteria.assigned_to:
        return False
    if criteria.search:
        needle = criteria.search.lower()
        fields = [query.subject, query.message, query.name, query.email or ""]
        if not any(needle in text.lower() for text in fields):
            return False
    return True


class InMemorySupportQueryRepository(SupportQueryRepository):
    """In-memory implementation of SupportQueryRepository for testing."""

    def __init__(self) -> None:
        self._queries: dict[SupportQueryId, SupportQuery] = {}

    async def find_by_id(self, query_id: SupportQueryId) -> Optional[SupportQuery]:
        """Find a query by ID."""
        return self._queries.get(query_id)

    async def find_all(
        self, criteria: SupportQueryFilter, limit: int = 10, offset: int = 0
    ) -> list[SupportQuery]:
        """Find queries matching a filter, newest first."""
        queries = [q for q in self._queries.values() if _matches(q, criteria)]
        queries.sort(key=lambda q: q.created_at, reverse=True)
        return queries[offset : offset + limit]

    async def count(self, criteria: SupportQueryFilter) -> int:
        """Count queries matching a filter."""
        return sum(1 for q in self._queries.values() if _matches(q, criteria))

    async def save(self, query: SupportQuery) -> SupportQuery:
        """Save a query."""
        self._queries[query.id] = query
        return query

    async def delete(self, query_id: SupportQueryId) -> bool:
        """Delete a query."""
        return self._queries.pop(query_id, None) is not None

    async def stats(self) -> SupportQueryStats:
        """Compute totals over all queries."""
        queries = list(self._queries.values())
        by_status = Counter(q.status for q in queries)
        by_priority = Counter(q.priority for q in queries)
        return SupportQueryStats(
            total_queries=len(queries),
            pending_queries=by_status[SupportStatus.PENDING],
            in_progress_queries=by_status[SupportStatus.IN_PROGRESS],
            resolved_queries=by_status[SupportStatus.RESOLVED],
            closed_queries=by_status[SupportStatus.CLOSED],
            urgent_queries=by_priority[SupportPriority.URGENT],
            by_category=dict(Counter(q.category for q in queries)),
            by_priority=dict(by_priority),
        )
