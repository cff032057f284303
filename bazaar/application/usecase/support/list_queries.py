"""List support queries use cases."""

import logfire
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from bazaar.application.usecase.pagination import PageInfo, offset_for
from bazaar.domain.repository import SupportQueryFilter
from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import (
    Principal,
    SupportCategory,
    SupportPriority,
    SupportStatus,
    UserId,
)

from .views import SupportQueryItem


class ListQueriesRequest(BaseModel):
    """List queries request.

    Only administrators may filter by anything but status; everyone else
    is limited to their own queries.
    """

    requester: Principal
    own_only: bool = False  # Restrict to the requester even for admins
    status: Optional[SupportStatus] = None
    category: Optional[SupportCategory] = None
    priority: Optional[SupportPriority] = None
    assigned_to: Optional[str] = None  # Admin user ID
    search: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListQueriesResponse(BaseModel):
    """List queries response."""

    queries: list[SupportQueryItem]
    pagination: PageInfo


class ListQueriesUseCase:
    """Use case for the "my queries" page and the admin support desk."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: ListQueriesRequest) -> ListQueriesResponse:
        """Execute list queries flow.

        Returns:
            One page of queries, newest first
        """
        with logfire.span(
            "list_queries.execute",
            requester_id=str(request.requester.id),
            status=request.status.value if request.status else None,
            page=request.page,
        ):
            criteria = SupportQueryFilter(
                status=request.status,
                category=request.category,
                priority=request.priority,
                assigned_to=(
                    UserId(UUID(request.assigned_to)) if request.assigned_to else None
                ),
                search=request.search.strip() if request.search else None,
                user_id=request.requester.id if request.own_only else None,
            )
            queries, total = await self.support_query_service.list_queries(
                request.requester,
                criteria,
                limit=request.limit,
                offset=offset_for(request.page, request.limit),
            )
            return ListQueriesResponse(
                queries=[SupportQueryItem.from_domain(q) for q in queries],
                pagination=PageInfo.build(request.page, request.limit, total),
            )
