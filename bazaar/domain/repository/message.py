"""Message repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Mapping, Optional

from bazaar.domain.model.message import Message
from bazaar.domain.value import ConversationId, UserId


class MessageRepository(ABC):
    """Repository for Message entity.

    Messages are append-only; read receipts are the only later addition.
    """

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Save a new message together with its initial read receipts.

        Args:
            message: The message to save

        Returns:
            The saved message
        """
        pass

    @abstractmethod
    async def find_page(
        self, conversation_id: ConversationId, limit: int, offset: int
    ) -> List[Message]:
        """Fetch one page of a conversation, newest message first.

        Args:
            conversation_id: Conversation ID
            limit: Page size
            offset: Number of newer messages to skip

        Returns:
            Messages with their read receipts, newest first
        """
        pass

    @abstractmethod
    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, at: datetime
    ) -> int:
        """Add a read receipt to every message the reader did not send.

        Receipts are only added when absent, so repeated calls are no-ops.

        Args:
            conversation_id: Conversation ID
            reader_id: The reading participant
            at: Time of reading

        Returns:
            Number of receipts added
        """
        pass

    @abstractmethod
    async def count_unread(
        self,
        reader_id: UserId,
        read_cutoffs: Mapping[ConversationId, Optional[datetime]],
    ) -> int:
        """Count messages sent by others after the reader's last read.

        Args:
            reader_id: The participant whose unread messages are counted
            read_cutoffs: Last-read timestamp per conversation (None means
                nothing was read yet)

        Returns:
            Unread message count summed across the given conversations
        """
        pass
