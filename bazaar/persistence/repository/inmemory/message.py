"""In-memory message repository for testing."""

from datetime import datetime
from typing import Mapping, Optional

from bazaar.domain.model.message import Message, ReadReceipt
from bazaar.domain.repository.message import MessageRepository
from bazaar.domain.value import ConversationId, MessageId, UserId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: dict[MessageId, Message] = {}

    async def save(self, message: Message) -> Message:
        """Save a new message with its initial receipts."""
        self._messages[message.id] = message
        return message

    def _in_conversation(self, conversation_id: ConversationId) -> list[Message]:
        return [
            m for m in self._messages.values() if m.conversation_id == conversation_id
        ]

    async def find_page(
        self, conversation_id: ConversationId, limit: int, offset: int
    ) -> list[Message]:
        """Fetch one page of a conversation, newest message first."""
        messages = self._in_conversation(conversation_id)
        messages.sort(key=lambda m: m.created_at, reverse=True)
        return messages[offset : offset + limit]

    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, at: datetime
    ) -> int:
        """Add missing receipts for every message the reader did not send."""
        added = 0
        for message in self._in_conversation(conversation_id):
            if message.sender_id == reader_id or message.is_read_by(reader_id):
                continue
            self._messages[message.id] = message.model_copy(
                update={
                    "read_by": [
                        *message.read_by,
                        ReadReceipt(reader_id=reader_id, read_at=at),
                    ]
                }
            )
            added += 1
        return added

    async def count_unread(
        self,
        reader_id: UserId,
        read_cutoffs: Mapping[ConversationId, Optional[datetime]],
    ) -> int:
        """Count messages by others created after each last-read timestamp."""
        unread = 0
        for message in self._messages.values():
            if message.sender_id == reader_id:
                continue
            if message.conversation_id not in read_cutoffs:
                continue
            cutoff = read_cutoffs[message.conversation_id]
            if cutoff is None or message.created_at > cutoff:
                unread += 1
        return unread
