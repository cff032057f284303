"""Conversation domain service."""

from typing import List, Tuple
from uuid import uuid4

import logfire

from bazaar.domain.error import ConflictError, InvalidOperationError, NotFoundError
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.message import Message, ReadReceipt
from bazaar.domain.repository import (
    ConversationRepository,
    ItemRepository,
    MessageRepository,
)
from bazaar.domain.value import (
    ConversationId,
    ItemId,
    MessageId,
    MessageType,
    Principal,
    SystemMessageType,
    UserId,
)

from .base import Service


class ConversationService(Service):
    """Domain service for buyer/seller conversations."""

    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        item_repository: ItemRepository,
    ) -> None:
        """Initialize conversation service.

        Args:
            conversation_repository: Conversation repository
            message_repository: Message repository
            item_repository: Item repository (seller lookup)
        """
        self.conversation_repository = conversation_repository
        self.message_repository = message_repository
        self.item_repository = item_repository

    async def get_or_create(
        self, item_id: ItemId, buyer: Principal
    ) -> Tuple[Conversation, bool]:
        """Open the conversation between a buyer and an item's owner.

        Concurrent first contacts for the same item and buyer converge on a
        single conversation: the insert tolerates the unique-key conflict and
        the loser re-reads the winner's row.

        Args:
            item_id: Item the buyer is interested in
            buyer: The interested user

        Returns:
            The conversation and whether this call created it

        Raises:
            NotFoundError: If the item does not exist
            InvalidOperationError: If the buyer owns the item
            ConflictError: If the conversation could neither be created nor
                found
        """
        with logfire.span(
            "conversation_service.get_or_create",
            item_id=str(item_id),
            buyer_id=str(buyer.id),
        ):
            item = await self.item_repository.find_by_id(item_id)
            if item is None:
                logfire.warn("Conversation for unknown item", item_id=str(item_id))
                raise NotFoundError("Item", str(item_id))

            seller_id = item.owner_id
            if seller_id == buyer.id:
                logfire.warn("Self-conversation attempt", item_id=str(item_id))
                raise InvalidOperationError(
                    "You cannot start a conversation with yourself"
                )

            existing = await self.conversation_repository.find_by_participants(
                item_id, seller_id, buyer.id
            )
            if existing is not None:
                return existing, False

            now = utcnow()
            intro = f"{buyer.name} is interested in your item: {item.title}"
            candidate = Conversation(
                id=ConversationId(uuid4()),
                item_id=item_id,
                seller_id=seller_id,
                buyer_id=buyer.id,
                last_message=intro,
                last_message_at=now,
                seller_last_read_at=now,
                buyer_last_read_at=now,
                created_at=now,
            )

            created = await self.conversation_repository.create_if_absent(candidate)
            if created is None:
                winner = await self.conversation_repository.find_by_participants(
                    item_id, seller_id, buyer.id
                )
                if winner is None:
                    logfire.error(
                        "Conversation vanished after conflicting insert",
                        item_id=str(item_id),
                        buyer_id=str(buyer.id),
                    )
                    raise ConflictError("Conversation could not be created")
                logfire.info(
                    "Concurrent conversation creation resolved",
                    conversation_id=str(winner.id),
                )
                return winner, False

            await self.message_repository.save(
                Message(
                    id=MessageId(uuid4()),
                    conversation_id=created.id,
                    sender_id=buyer.id,
                    body=intro,
                    message_type=MessageType.SYSTEM,
                    system_subtype=SystemMessageType.JOIN,
                    read_by=[ReadReceipt(reader_id=buyer.id, read_at=now)],
                    created_at=now,
                )
            )

            logfire.info(
                "Conversation created",
                conversation_id=str(created.id),
                item_id=str(item_id),
            )
            return created, True

    async def list_conversations(self, user_id: UserId) -> List[Conversation]:
        """List the user's active conversations, most recent first."""
        return await self.conversation_repository.find_active_for_participant(user_id)

    async def unread_count(self, user_id: UserId) -> int:
        """Count messages from the other side received after the user last read.

        Args:
            user_id: Participant ID

        Returns:
            Unread messages summed over all active conversations
        """
        with logfire.span("conversation_service.unread_count", user_id=str(user_id)):
            conversations = await self.conversation_repository.find_active_for_participant(
                user_id
            )
            cutoffs = {
                conversation.id: conversation.last_read_at(user_id)
                for conversation in conversations
            }
            return await self.message_repository.count_unread(user_id, cutoffs)
