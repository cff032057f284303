"""Respond to support query use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import Principal, SupportQueryId

from .views import SupportQueryItem


class RespondToQueryRequest(BaseModel):
    """Admin response request."""

    query_id: str  # UUID string
    admin: Principal
    message: str


class RespondToQueryUseCase:
    """Use case for administrators answering a query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: RespondToQueryRequest) -> SupportQueryItem:
        """Execute respond to query flow.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
            ValidationError: If the response is empty or too long
        """
        query = await self.support_query_service.respond(
            SupportQueryId(UUID(request.query_id)), request.admin, request.message
        )
        return SupportQueryItem.from_domain(query)
