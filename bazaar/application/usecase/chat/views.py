"""Response items shared by the chat use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.message import Message
from bazaar.domain.value import MessageType, SystemMessageType


class ConversationItem(BaseModel):
    """Conversation summary."""

    conversation_id: str
    item_id: str
    seller_id: str
    buyer_id: str
    last_message: str
    last_message_at: datetime
    is_active: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, conversation: Conversation) -> "ConversationItem":
        return cls(
            conversation_id=str(conversation.id),
            item_id=str(conversation.item_id),
            seller_id=str(conversation.seller_id),
            buyer_id=str(conversation.buyer_id),
            last_message=conversation.last_message,
            last_message_at=conversation.last_message_at,
            is_active=conversation.is_active,
            created_at=conversation.created_at,
        )


class ReadReceiptItem(BaseModel):
    """Who read a message and when."""

    reader_id: str
    read_at: datetime


class MessageItem(BaseModel):
    """Chat message."""

    message_id: str
    conversation_id: str
    sender_id: str
    body: str
    message_type: MessageType
    system_subtype: Optional[SystemMessageType]
    read_by: list[ReadReceiptItem]
    created_at: datetime

    @classmethod
    def from_domain(cls, message: Message) -> "MessageItem":
        return cls(
            message_id=str(message.id),
            conversation_id=str(message.conversation_id),
            sender_id=str(message.sender_id),
            body=message.body,
            message_type=message.message_type,
            system_subtype=message.system_subtype,
            read_by=[
                ReadReceiptItem(reader_id=str(r.reader_id), read_at=r.read_at)
                for r in message.read_by
            ],
            created_at=message.created_at,
        )
