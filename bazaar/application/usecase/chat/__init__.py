"""Chat use cases."""

from .get_or_create_conversation import (
    GetOrCreateConversationRequest,
    GetOrCreateConversationResponse,
    GetOrCreateConversationUseCase,
)
from .list_conversations import (
    ListConversationsRequest,
    ListConversationsResponse,
    ListConversationsUseCase,
)
from .list_messages import (
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
    MessagePageInfo,
)
from .send_message import SendMessageRequest, SendMessageUseCase
from .unread_count import UnreadCountRequest, UnreadCountResponse, UnreadCountUseCase
from .views import ConversationItem, MessageItem, ReadReceiptItem

__all__ = [
    "ConversationItem",
    "GetOrCreateConversationRequest",
    "GetOrCreateConversationResponse",
    "GetOrCreateConversationUseCase",
    "ListConversationsRequest",
    "ListConversationsResponse",
    "ListConversationsUseCase",
    "ListMessagesRequest",
    "ListMessagesResponse",
    "ListMessagesUseCase",
    "MessageItem",
    "MessagePageInfo",
    "ReadReceiptItem",
    "SendMessageRequest",
    "SendMessageUseCase",
    "UnreadCountRequest",
    "UnreadCountResponse",
    "UnreadCountUseCase",
]
