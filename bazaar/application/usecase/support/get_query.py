"""Get support query use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import Principal, SupportQueryId

from .views import SupportQueryItem


class GetQueryRequest(BaseModel):
    """Get query request."""

    query_id: str  # UUID string
    requester: Principal


class GetQueryUseCase:
    """Use case for reading one support query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: GetQueryRequest) -> SupportQueryItem:
        """Execute get query flow.

        Raises:
            NotFoundError: If the query does not exist
            ForbiddenError: If a non-admin reads someone else's query
        """
        query = await self.support_query_service.get_query(
            SupportQueryId(UUID(request.query_id)), request.requester
        )
        return SupportQueryItem.from_domain(query)
