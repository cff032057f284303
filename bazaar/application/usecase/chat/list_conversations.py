"""List conversations use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import ConversationService
from bazaar.domain.value import UserId

from .views import ConversationItem


class ListConversationsRequest(BaseModel):
    """List conversations request."""

    user_id: str  # User ID from authenticated user


class ListConversationsResponse(BaseModel):
    """List conversations response."""

    conversations: list[ConversationItem]


class ListConversationsUseCase:
    """Use case for a user's inbox."""

    def __init__(self, conversation_service: ConversationService) -> None:
        self.conversation_service = conversation_service

    async def execute(self, request: ListConversationsRequest) -> ListConversationsResponse:
        """Execute list conversations flow.

        Returns:
            Active conversations the user takes part in, most recent first
        """
        conversations = await self.conversation_service.list_conversations(
            UserId(UUID(request.user_id))
        )
        return ListConversationsResponse(
            conversations=[ConversationItem.from_domain(c) for c in conversations]
        )
