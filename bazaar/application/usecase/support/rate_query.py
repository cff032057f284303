"""Rate support query use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import SupportQueryId, UserId

from .views import SupportQueryItem


class RateQueryRequest(BaseModel):
    """Satisfaction rating request."""

    query_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    rating: int
    feedback: Optional[str] = None


class RateQueryUseCase:
    """Use case for the owner rating a resolved query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: RateQueryRequest) -> SupportQueryItem:
        """Execute rate query flow.

        Raises:
            NotFoundError: If the query does not exist
            ForbiddenError: If the user does not own the query
            InvalidOperationError: If the query is not resolved
            ValidationError: If the rating is outside 1-5
        """
        query = await self.support_query_service.rate(
            SupportQueryId(UUID(request.query_id)),
            UserId(UUID(request.user_id)),
            rating=request.rating,
            feedback=request.feedback,
        )
        return SupportQueryItem.from_domain(query)
