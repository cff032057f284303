"""Support desk statistics use case."""

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import Principal, SupportCategory, SupportPriority


class QueryStatsRequest(BaseModel):
    """Support desk statistics request."""

    admin: Principal


class QueryStatsResponse(BaseModel):
    """Support desk totals.

    Breakdowns are sorted by count, largest first.
    """

    total_queries: int
    pending_queries: int
    in_progress_queries: int
    resolved_queries: int
    closed_queries: int
    urgent_queries: int
    by_category: dict[SupportCategory, int]
    by_priority: dict[SupportPriority, int]


class QueryStatsUseCase:
    """Use case for the administrators' support dashboard."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: QueryStatsRequest) -> QueryStatsResponse:
        """Execute query statistics flow.

        Raises:
            ForbiddenError: If the caller is not an administrator
        """
        stats = await self.support_query_service.stats(request.admin)
        return QueryStatsResponse(
            total_queries=stats.total_queries,
            pending_queries=stats.pending_queries,
            in_progress_queries=stats.in_progress_queries,
            resolved_queries=stats.resolved_queries,
            closed_queries=stats.closed_queries,
            urgent_queries=stats.urgent_queries,
            by_category=dict(
                sorted(stats.by_category.items(), key=lambda kv: kv[1], reverse=True)
            ),
            by_priority=dict(
                sorted(stats.by_priority.items(), key=lambda kv: kv[1], reverse=True)
            ),
        )
