"""List messages use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from bazaar.domain.service import MessageService
from bazaar.domain.value import ConversationId, UserId

from .views import MessageItem


class ListMessagesRequest(BaseModel):
    """List messages request."""

    conversation_id: str  # UUID string
    reader_id: str  # User ID from authenticated user
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=100)


class MessagePageInfo(BaseModel):
    """Pagination of a message history."""

    page: int
    limit: int
    has_more: bool


class ListMessagesResponse(BaseModel):
    """One page of messages, oldest first."""

    messages: list[MessageItem]
    pagination: MessagePageInfo


class ListMessagesUseCase:
    """Use case for reading a conversation (marks it read)."""

    def __init__(self, message_service: MessageService) -> None:
        """Initialize list messages use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: ListMessagesRequest) -> ListMessagesResponse:
        """Execute list messages flow.

        Raises:
            NotFoundError: If the conversation does not exist
            ForbiddenError: If the reader is not a participant
        """
        messages, has_more = await self.message_service.list_messages(
            ConversationId(UUID(request.conversation_id)),
            UserId(UUID(request.reader_id)),
            page=request.page,
            page_size=request.limit,
        )
        return ListMessagesResponse(
            messages=[MessageItem.from_domain(m) for m in messages],
            pagination=MessagePageInfo(
                page=request.page, limit=request.limit, has_more=has_more
            ),
        )
