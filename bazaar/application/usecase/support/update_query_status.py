"""Update support query status use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import (
    Principal,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
    UserId,
)

from .views import SupportQueryItem


class UpdateQueryStatusRequest(BaseModel):
    """Triage request. Fields left as None are unchanged."""

    query_id: str  # UUID string
    admin: Principal
    status: Optional[SupportStatus] = None
    priority: Optional[SupportPriority] = None
    assigned_to: Optional[str] = None  # Admin user ID
    tags: Optional[list[str]] = None


class UpdateQueryStatusUseCase:
    """Use case for administrators triaging a query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: UpdateQueryStatusRequest) -> SupportQueryItem:
        """Execute update query status flow.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
            InvalidOperationError: If the status would move backwards
        """
        query = await self.support_query_service.update_status(
            SupportQueryId(UUID(request.query_id)),
            request.admin,
            status=request.status,
            priority=request.priority,
            assigned_to=UserId(UUID(request.assigned_to)) if request.assigned_to else None,
            tags=request.tags,
        )
        return SupportQueryItem.from_domain(query)
