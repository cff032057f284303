"""In-memory conversation repository for testing."""

from datetime import datetime
from typing import Optional

from bazaar.domain.model.conversation import Conversation
from bazaar.domain.repository.conversation import ConversationRepository
from bazaar.domain.value import ConversationId, ItemId, ParticipantRole, UserId


class InMemoryConversationRepository(ConversationRepository):
    """In-memory implementation of ConversationRepository for testing.

    ``create_if_absent`` checks and inserts without awaiting, so concurrent
    first contacts on one event loop behave like the unique index.
    """

    def __init__(self) -> None:
        self._conversations: dict[ConversationId, Conversation] = {}

    async def find_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        """Find a conversation by ID."""
        return self._conversations.get(conversation_id)

    def _find_triple(
        self, item_id: ItemId, seller_id: UserId, buyer_id: UserId
    ) -> Optional[Conversation]:
        for conversation in self._conversations.values():
            if (
                conversation.item_id == item_id
                and conversation.seller_id == seller_id
                and conversation.buyer_id == buyer_id
            ):
                return conversation
        return None

    async def find_by_participants(
        self, item_id: ItemId, seller_id: UserId, buyer_id: UserId
    ) -> Optional[Conversation]:
        """Find the conversation for an (item, seller, buyer) triple."""
        return self._find_triple(item_id, seller_id, buyer_id)

    async def create_if_absent(self, conversation: Conversation) -> Optional[Conversation]:
        """Insert unless the triple exists."""
        if self._find_triple(
            conversation.item_id, conversation.seller_id, conversation.buyer_id
        ):
            return None
        self._conversations[conversation.id] = conversation
        return conversation

    async def find_active_for_participant(self, user_id: UserId) -> list[Conversation]:
        """List active conversations of a participant, newest message first."""
        conversations = [
            c
            for c in self._conversations.values()
            if c.is_active and c.is_participant(user_id)
        ]
        conversations.sort(key=lambda c: c.last_message_at, reverse=True)
        return conversations

    async def update_last_message(
        self, conversation_id: ConversationId, preview: str, at: datetime
    ) -> None:
        """Store the denormalized last message preview."""
        conversation = self._conversations.get(conversation_id)
        if conversation is not None:
            self._conversations[conversation_id] = conversation.model_copy(
                update={"last_message": preview, "last_message_at": at}
            )

    async def mark_read(
        self, conversation_id: ConversationId, role: ParticipantRole, at: datetime
    ) -> None:
        """Advance one participant's last-read timestamp."""
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            return
        field = (
            "seller_last_read_at"
            if role == ParticipantRole.SELLER
            else "buyer_last_read_at"
        )
        self._conversations[conversation_id] = conversation.model_copy(
            update={field: at}
        )

