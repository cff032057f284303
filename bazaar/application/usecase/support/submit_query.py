"""Submit support query use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import SupportCategory, UserId

from .views import SupportQueryItem


class SubmitQueryRequest(BaseModel):
    """Submit query request.

    Contact fields left empty are taken from the user's account.
    """

    user_id: str  # User ID from authenticated user
    subject: str
    message: str
    category: SupportCategory = SupportCategory.GENERAL
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class SubmitQueryUseCase:
    """Use case for filing a support query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        """Initialize submit query use case.

        Args:
            support_query_service: Support desk domain service
        """
        self.support_query_service = support_query_service

    async def execute(self, request: SubmitQueryRequest) -> SupportQueryItem:
        """Execute submit query flow.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If a field is empty or too long
        """
        query = await self.support_query_service.submit_query(
            UserId(UUID(request.user_id)),
            subject=request.subject,
            message=request.message,
            category=request.category,
            name=request.name,
            email=request.email,
            phone=request.phone,
        )
        return SupportQueryItem.from_domain(query)
