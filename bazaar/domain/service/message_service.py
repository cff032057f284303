"""Message domain service."""

from typing import List, Tuple
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.message import Message, ReadReceipt
from bazaar.domain.repository import ConversationRepository, MessageRepository
from bazaar.domain.value import ConversationId, MessageId, MessageType, UserId

from .base import Service


class MessageService(Service):
    """Domain service for sending and reading chat messages."""

    def __init__(
        self,
        message_repository: MessageRepository,
        conversation_repository: ConversationRepository,
    ) -> None:
        """Initialize message service.

        Args:
            message_repository: Message repository
            conversation_repository: Conversation repository
        """
        self.message_repository = message_repository
        self.conversation_repository = conversation_repository

    async def get_participant_conversation(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        """Load a conversation the user takes part in.

        Raises:
            NotFoundError: If the conversation does not exist
            ForbiddenError: If the user is neither buyer nor seller
        """
        conversation = await self.conversation_repository.find_by_id(conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation", str(conversation_id))
        if not conversation.is_participant(user_id):
            logfire.warn(
                "Conversation access denied",
                conversation_id=str(conversation_id),
                user_id=str(user_id),
            )
            raise ForbiddenError("Access denied to this conversation")
        return conversation

    async def list_messages(
        self,
        conversation_id: ConversationId,
        reader_id: UserId,
        page: int = 1,
        page_size: int = 50,
    ) -> Tuple[List[Message], bool]:
        """Read one page of a conversation.

        Every message the reader did not send is marked read and the reader's
        last-read timestamp advances. Pages count back from the newest
        message; each page is returned oldest first.

        Args:
            conversation_id: Conversation ID
            reader_id: Reading participant
            page: 1-based page number
            page_size: Messages per page

        Returns:
            The page's messages and whether an older page may exist

        Raises:
            NotFoundError: If the conversation does not exist
            ForbiddenError: If the reader is not a participant
        """
        with logfire.span(
            "message_service.list_messages",
            conversation_id=str(conversation_id),
            reader_id=str(reader_id),
            page=page,
        ):
            conversation = await self.get_participant_conversation(
                conversation_id, reader_id
            )

            now = utcnow()
            marked = await self.message_repository.mark_read(
                conversation_id, reader_id, at=now
            )
            await self.conversation_repository.mark_read(
                conversation_id, conversation.role_of(reader_id), at=now
            )

            newest_first = await self.message_repository.find_page(
                conversation_id, limit=page_size, offset=(page - 1) * page_size
            )
            logfire.debug(
                "Messages read",
                conversation_id=str(conversation_id),
                marked=marked,
                returned=len(newest_first),
            )
            return list(reversed(newest_first)), len(newest_first) == page_size

    async def send_message(
        self,
        conversation_id: ConversationId,
        sender_id: UserId,
        body: str,
        message_type: MessageType = MessageType.TEXT,
    ) -> Message:
        """Post a message to a conversation.

        Args:
            conversation_id: Conversation ID
            sender_id: Sending participant
            body: Message text (1-1000 characters)
            message_type: Text or image

        Returns:
            The stored message, already read by its sender

        Raises:
            NotFoundError: If the conversation does not exist
            ForbiddenError: If the sender is not a participant
            InvalidOperationError: If the conversation is closed or a system
                message is submitted
            ValidationError: If the body is empty or too long
        """
        with logfire.span(
            "message_service.send_message",
            conversation_id=str(conversation_id),
            sender_id=str(sender_id),
        ):
            conversation = await self.get_participant_conversation(
                conversation_id, sender_id
            )
            if not conversation.is_active:
                raise InvalidOperationError("Conversation is no longer active")
            if message_type == MessageType.SYSTEM:
                raise InvalidOperationError("System messages cannot be sent by users")

            now = utcnow()
            try:
                message = Message(
                    id=MessageId(uuid4()),
                    conversation_id=conversation_id,
                    sender_id=sender_id,
                    body=body,
                    message_type=message_type,
                    read_by=[ReadReceipt(reader_id=sender_id, read_at=now)],
                    created_at=now,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid message", error=str(e))
                raise ValidationError.from_pydantic(e)

            saved = await self.message_repository.save(message)
            await self.conversation_repository.update_last_message(
                conversation_id, saved.body, at=now
            )

            logfire.info(
                "Message sent",
                conversation_id=str(conversation_id),
                message_id=str(saved.id),
            )
            return saved
