"""Message entity.

Messages are immutable once sent; the only thing that grows afterwards is
the set of read receipts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import (
    ConversationId,
    MessageId,
    MessageType,
    SystemMessageType,
    UserId,
)
from bazaar.domain.value.common import ValueObject


class ReadReceipt(ValueObject):
    """Marks that a user has seen a message."""

    reader_id: UserId
    read_at: datetime


class Message(DomainModel):
    """Chat message inside a conversation."""

    id: MessageId
    conversation_id: ConversationId
    sender_id: UserId
    body: str = Field(min_length=1, max_length=1000)
    message_type: MessageType = MessageType.TEXT
    system_subtype: Optional[SystemMessageType] = None
    read_by: list[ReadReceipt] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("body", mode="before")
    @classmethod
    def strip_body(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_system_subtype(self) -> "Message":
        """Only system messages carry a subtype."""
        if self.system_subtype is not None and self.message_type != MessageType.SYSTEM:
            raise ValueError("Only system messages can have a system subtype")
        return self

    def is_read_by(self, user_id: UserId) -> bool:
        return any(receipt.reader_id == user_id for receipt in self.read_by)
