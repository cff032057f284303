"""Conversation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from bazaar.domain.model.conversation import Conversation
from bazaar.domain.value import ConversationId, ItemId, ParticipantRole, UserId


class ConversationRepository(ABC):
    """Repository for Conversation aggregate.

    The (item, seller, buyer) triple is unique at the storage level.
    """

    @abstractmethod
    async def find_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        """Find a conversation by ID.

        Args:
            conversation_id: The conversation's unique identifier

        Returns:
            The conversation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_participants(
        self, item_id: ItemId, seller_id: UserId, buyer_id: UserId
    ) -> Optional[Conversation]:
        """Find the conversation for an (item, seller, buyer) triple.

        Args:
            item_id: Item being discussed
            seller_id: Item owner
            buyer_id: Interested user

        Returns:
            The conversation if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def create_if_absent(self, conversation: Conversation) -> Optional[Conversation]:
        """Insert a conversation unless its triple already exists.

        Args:
            conversation: The conversation to insert

        Returns:
            The inserted conversation, or None if another conversation with
            the same triple won the race
        """
        pass

    @abstractmethod
    async def find_active_for_participant(self, user_id: UserId) -> List[Conversation]:
        """List active conversations where the user is buyer or seller.

        Args:
            user_id: Participant ID

        Returns:
            Conversations ordered by last message time, newest first
        """
        pass

    @abstractmethod
    async def update_last_message(
        self, conversation_id: ConversationId, preview: str, at: datetime
    ) -> None:
        """Store the denormalized last message preview.

        Args:
            conversation_id: Conversation ID
            preview: Text of the newest message
            at: Time of the newest message
        """
        pass

    @abstractmethod
    async def mark_read(
        self, conversation_id: ConversationId, role: ParticipantRole, at: datetime
    ) -> None:
        """Advance one participant's last-read timestamp.

        Args:
            conversation_id: Conversation ID
            role: Which side of the conversation read it
            at: Time of reading
        """
        pass
