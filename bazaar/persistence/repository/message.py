"""PostgreSQL implementation of Message repository."""

from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

import logfire
from sqlalchemy import and_, desc, func, insert, literal, or_, select
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Message
from bazaar.domain.repository import MessageRepository
from bazaar.domain.value import ConversationId, UserId
from bazaar.persistence.mappers import message_to_dict, row_to_message
from bazaar.persistence.tables import message_reads_table, messages_table


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository.

    Read receipts live in ``message_reads`` keyed by (message, reader), so
    marking a message read twice is a no-op.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_receipts(
        self, message_ids: list[UUID]
    ) -> dict[UUID, list[Dict[str, Any]]]:
        """Fetch read receipts for multiple messages in a single query.

        Args:
            message_ids: List of message IDs

        Returns:
            Dict mapping message_id -> receipt rows
        """
        if not message_ids:
            return {}

        stmt = select(message_reads_table).where(
            message_reads_table.c.message_id.in_(message_ids)
        )
        result = await self.session.execute(stmt)

        receipts: dict[UUID, list[Dict[str, Any]]] = defaultdict(list)
        for row in result.fetchall():
            receipts[row.message_id].append(row._asdict())
        return receipts

    async def save(self, message: Message) -> Message:
        """Save a new message together with its initial read receipts."""
        with logfire.span(
            "message_repository.save",
            conversation_id=str(message.conversation_id),
            message_type=message.message_type.value,
        ):
            await self.session.execute(
                insert(messages_table).values(**message_to_dict(message))
            )
            if message.read_by:
                await self.session.execute(
                    pg_insert(message_reads_table)
                    .values(
                        [
                            {
                                "message_id": message.id,
                                "reader_id": receipt.reader_id,
                                "read_at": receipt.read_at,
                            }
                            for receipt in message.read_by
                        ]
                    )
                    .on_conflict_do_nothing()
                )
            await self.session.flush()
            return message

    async def find_page(
        self, conversation_id: ConversationId, limit: int, offset: int
    ) -> List[Message]:
        """Fetch one page of a conversation, newest message first."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.conversation_id == conversation_id)
            .order_by(desc(messages_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()

        receipts = await self._fetch_receipts([row.id for row in rows])
        return [row_to_message(row._asdict(), receipts.get(row.id, [])) for row in rows]

    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, at: datetime
    ) -> int:
        """Add missing receipts for every message the reader did not send."""
        with logfire.span(
            "message_repository.mark_read",
            conversation_id=str(conversation_id),
            reader_id=str(reader_id),
        ):
            unread = select(
                messages_table.c.id,
                literal(reader_id, PG_UUID),
                literal(at, TIMESTAMP(timezone=True)),
            ).where(
                messages_table.c.conversation_id == conversation_id,
                messages_table.c.sender_id != reader_id,
            )
            stmt = (
                pg_insert(message_reads_table)
                .from_select(["message_id", "reader_id", "read_at"], unread)
                .on_conflict_do_nothing()
            )
            result = await self.session.execute(stmt)
            await self.session.flush()

            added = result.rowcount or 0  # type: ignore[attr-defined]
            logfire.debug("Messages marked read", added=added)
            return added

    async def count_unread(
        self,
        reader_id: UserId,
        read_cutoffs: Mapping[ConversationId, Optional[datetime]],
    ) -> int:
        """Count messages by others created after each last-read timestamp."""
        if not read_cutoffs:
            return 0

        per_conversation = []
        for conversation_id, cutoff in read_cutoffs.items():
            condition = messages_table.c.conversation_id == conversation_id
            if cutoff is not None:
                condition = and_(condition, messages_table.c.created_at > cutoff)
            per_conversation.append(condition)

        stmt = (
            select(func.count())
            .select_from(messages_table)
            .where(
                messages_table.c.sender_id != reader_id,
                or_(*per_conversation),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
