"""PostgreSQL implementation of Conversation repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import desc, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Conversation
from bazaar.domain.repository import ConversationRepository
from bazaar.domain.value import ConversationId, ItemId, ParticipantRole, UserId
from bazaar.persistence.mappers import conversation_to_dict, row_to_conversation
from bazaar.persistence.tables import conversations_table


class PostgresConversationRepository(ConversationRepository):
    """PostgreSQL implementation of ConversationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        """Find a conversation by ID."""
        stmt = select(conversations_table).where(
            conversations_table.c.id == conversation_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_conversation(row._asdict()) if row else None

    async def find_by_participants(
        self, item_id: ItemId, seller_id: UserId, buyer_id: UserId
    ) -> Optional[Conversation]:
        """Find the conversation for an (item, seller, buyer) triple."""
        stmt = select(conversations_table).where(
            conversations_table.c.item_id == item_id,
            conversations_table.c.seller_id == seller_id,
            conversations_table.c.buyer_id == buyer_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_conversation(row._asdict()) if row else None

    async def create_if_absent(self, conversation: Conversation) -> Optional[Conversation]:
        """Insert unless the triple exists; None when another insert won."""
        with logfire.span(
            "conversation_repository.create_if_absent",
            item_id=str(conversation.item_id),
        ):
            stmt = (
                pg_insert(conversations_table)
                .values(**conversation_to_dict(conversation))
                .on_conflict_do_nothing(constraint="uq_conversation_triple")
                .returning(*conversations_table.c)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()

            if not row:
                logfire.info(
                    "Conversation already created concurrently",
                    item_id=str(conversation.item_id),
                )
                return None
            return row_to_conversation(row._asdict())

    async def find_active_for_participant(self, user_id: UserId) -> List[Conversation]:
        """List active conversations of a participant, newest message first."""
        stmt = (
            select(conversations_table)
            .where(
                or_(
                    conversations_table.c.seller_id == user_id,
                    conversations_table.c.buyer_id == user_id,
                ),
                conversations_table.c.is_active.is_(True),
            )
            .order_by(desc(conversations_table.c.last_message_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_conversation(row._asdict()) for row in result.fetchall()]

    async def update_last_message(
        self, conversation_id: ConversationId, preview: str, at: datetime
    ) -> None:
        """Store the denormalized last message preview."""
        stmt = (
            update(conversations_table)
            .where(conversations_table.c.id == conversation_id)
            .values(last_message=preview, last_message_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_read(
        self, conversation_id: ConversationId, role: ParticipantRole, at: datetime
    ) -> None:
        """Advance one participant's last-read timestamp."""
        column = (
            "seller_last_read_at"
            if role == ParticipantRole.SELLER
            else "buyer_last_read_at"
        )
        stmt = (
            update(conversations_table)
            .where(conversations_table.c.id == conversation_id)
            .values({column: at})
        )
        await self.session.execute(stmt)
        await self.session.flush()
