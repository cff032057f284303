"""Send message use case."""

from uuid import UUID

from pydantic import BaseModel

from bazaar.domain.service import MessageService
from bazaar.domain.value import ConversationId, MessageType, UserId

from .views import MessageItem


class SendMessageRequest(BaseModel):
    """Send message request."""

    conversation_id: str  # UUID string
    sender_id: str  # User ID from authenticated user
    body: str
    message_type: MessageType = MessageType.TEXT


class SendMessageUseCase:
    """Use case for posting a chat message.

    Both the HTTP route and the WebSocket channel send through this use
    case, so the two paths share validation and persistence.
    """

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: SendMessageRequest) -> MessageItem:
        """Execute send message flow.

        Raises:
            NotFoundError: If the conversation does not exist
            ForbiddenError: If the sender is not a participant
            InvalidOperationError: If the conversation is closed
            ValidationError: If the body is empty or too long
        """
        message = await self.message_service.send_message(
            ConversationId(UUID(request.conversation_id)),
            UserId(UUID(request.sender_id)),
            request.body,
            message_type=request.message_type,
        )
        return MessageItem.from_domain(message)
