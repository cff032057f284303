"""Get or create conversation use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import ConversationService
from bazaar.domain.value import ItemId, Principal

from .views import ConversationItem


class GetOrCreateConversationRequest(BaseModel):
    """Open conversation request."""

    item_id: str  # UUID string
    buyer: Principal  # Authenticated user contacting the seller


class GetOrCreateConversationResponse(BaseModel):
    """Open conversation response."""

    conversation: ConversationItem
    created: bool


class GetOrCreateConversationUseCase:
    """Use case for a buyer contacting the owner of an item."""

    def __init__(self, conversation_service: ConversationService) -> None:
        """Initialize get or create conversation use case.

        Args:
            conversation_service: Conversation domain service
        """
        self.conversation_service = conversation_service

    async def execute(
        self, request: GetOrCreateConversationRequest
    ) -> GetOrCreateConversationResponse:
        """Execute get or create conversation flow.

        Raises:
            NotFoundError: If the item does not exist
            InvalidOperationError: If the buyer owns the item
            ConflictError: If a concurrent creation could not be reconciled
        """
        conversation, created = await self.conversation_service.get_or_create(
            ItemId(UUID(request.item_id)), request.buyer
        )
        return GetOrCreateConversationResponse(
            conversation=ConversationItem.from_domain(conversation),
            created=created,
        )
