"""Delete support query use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import SupportQueryService
from bazaar.domain.value import Principal, SupportQueryId


class DeleteQueryRequest(BaseModel):
    """Delete query request."""

    query_id: str  # UUID string
    admin: Principal


class DeleteQueryResponse(BaseModel):
    """Delete query response."""

    query_id: str
    deleted: bool


class DeleteQueryUseCase:
    """Use case for administrators removing a query."""

    def __init__(self, support_query_service: SupportQueryService) -> None:
        self.support_query_service = support_query_service

    async def execute(self, request: DeleteQueryRequest) -> DeleteQueryResponse:
        """Execute delete query flow.

        Raises:
            ForbiddenError: If the caller is not an administrator
            NotFoundError: If the query does not exist
        """
        await self.support_query_service.delete(
            SupportQueryId(UUID(request.query_id)), request.admin
        )
        return DeleteQueryResponse(query_id=request.query_id, deleted=True)
