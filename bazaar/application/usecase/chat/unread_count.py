"""Unread count use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import ConversationService
from bazaar.domain.value import UserId


class UnreadCountRequest(BaseModel):
    """Unread count request."""

    user_id: str  # User ID from authenticated user


class UnreadCountResponse(BaseModel):
    """Unread count response."""

    unread_count: int


class UnreadCountUseCase:
    """Use case for the inbox badge."""

    def __init__(self, conversation_service: ConversationService) -> None:
        self.conversation_service = conversation_service

    async def execute(self, request: UnreadCountRequest) -> UnreadCountResponse:
        count = await self.conversation_service.unread_count(
            UserId(UUID(request.user_id))
        )
        return UnreadCountResponse(unread_count=count)
