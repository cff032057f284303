"""Unit tests for ConversationService and MessageService."""

import asyncio
from uuid import uuid4

import pytest

from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.repository import (
    ConversationRepository,
    ItemRepository,
    UserRepository,
)
from bazaar.domain.service import ConversationService, MessageService
from bazaar.domain.value import (
    ConversationId,
    ItemId,
    MessageType,
    SystemMessageType,
    UserId,
)
from tests.conftest import make_item, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _listing(unit_env, title: str = "Oak dining table"):
    """A seller, a buyer and an item listed by the seller."""
    users = await unit_env.get(UserRepository)
    items = await unit_env.get(ItemRepository)
    seller = await users.save(make_user("Sam Seller"))
    buyer = await users.save(make_user("Bea Buyer"))
    item = await items.save(make_item(seller, title))
    return seller, buyer, item


class TestGetOrCreateConversation:
    """Tests for get_or_create."""

    @pytest.mark.asyncio
    async def test_first_contact_creates_conversation_and_intro(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        seller, buyer, item = await _listing(unit_env)

        conversation, created = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        assert created
        assert conversation.seller_id == seller.id
        assert conversation.buyer_id == buyer.id
        assert (
            conversation.last_message
            == "Bea Buyer is interested in your item: Oak dining table"
        )
        page, _ = await messages.list_messages(conversation.id, buyer.id)
        assert len(page) == 1
        assert page[0].message_type == MessageType.SYSTEM
        assert page[0].system_subtype == SystemMessageType.JOIN

    @pytest.mark.asyncio
    async def test_second_contact_returns_same_conversation(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        _, buyer, item = await _listing(unit_env)

        first, _ = await conversations.get_or_create(item.id, buyer.to_principal())
        second, created = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        assert not created
        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_concurrent_first_contacts_converge(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        repo = await unit_env.get(ConversationRepository)
        _, buyer, item = await _listing(unit_env)

        results = await asyncio.gather(
            *(conversations.get_or_create(item.id, buyer.to_principal()) for _ in range(5))
        )

        assert len({conversation.id for conversation, _ in results}) == 1
        assert sum(1 for _, created in results if created) == 1
        assert len(await repo.find_active_for_participant(buyer.id)) == 1

    @pytest.mark.asyncio
    async def test_owner_cannot_message_themselves(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        seller, _, item = await _listing(unit_env)

        with pytest.raises(InvalidOperationError):
            await conversations.get_or_create(item.id, seller.to_principal())

    @pytest.mark.asyncio
    async def test_unknown_item_is_not_found(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        _, buyer, _ = await _listing(unit_env)

        with pytest.raises(NotFoundError):
            await conversations.get_or_create(ItemId(uuid4()), buyer.to_principal())


class TestMessages:
    """Tests for sending and reading messages."""

    @pytest.mark.asyncio
    async def test_send_updates_preview_and_reads_for_sender(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        repo = await unit_env.get(ConversationRepository)
        _, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        message = await messages.send_message(conversation.id, buyer.id, "Still available?")

        assert message.is_read_by(buyer.id)
        stored = await repo.find_by_id(conversation.id)
        assert stored.last_message == "Still available?"
        assert stored.last_message_at == message.created_at

    @pytest.mark.asyncio
    async def test_outsider_cannot_send_or_read(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        _, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )
        outsider = UserId(uuid4())

        with pytest.raises(ForbiddenError):
            await messages.send_message(conversation.id, outsider, "Hi")
        with pytest.raises(ForbiddenError):
            await messages.list_messages(conversation.id, outsider)

    @pytest.mark.asyncio
    async def test_system_messages_cannot_be_sent(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        _, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        with pytest.raises(InvalidOperationError):
            await messages.send_message(
                conversation.id, buyer.id, "Fake", message_type=MessageType.SYSTEM
            )

    @pytest.mark.asyncio
    async def test_empty_message_is_rejected(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        _, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        with pytest.raises(ValidationError):
            await messages.send_message(conversation.id, buyer.id, "  ")

    @pytest.mark.asyncio
    async def test_unknown_conversation_is_not_found(self, unit_env):
        messages = await unit_env.get(MessageService)

        with pytest.raises(NotFoundError):
            await messages.send_message(ConversationId(uuid4()), UserId(uuid4()), "Hi")

    @pytest.mark.asyncio
    async def test_pages_count_back_from_newest_and_read_oldest_first(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        _, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )
        for n in range(1, 5):
            await messages.send_message(conversation.id, buyer.id, f"Message {n}")

        newest, has_more = await messages.list_messages(
            conversation.id, buyer.id, page=1, page_size=2
        )
        older, _ = await messages.list_messages(
            conversation.id, buyer.id, page=2, page_size=2
        )
        oldest, has_more_after_last = await messages.list_messages(
            conversation.id, buyer.id, page=3, page_size=2
        )

        assert [m.body for m in newest] == ["Message 3", "Message 4"]
        assert has_more
        assert [m.body for m in older] == ["Message 1", "Message 2"]
        assert len(oldest) == 1
        assert not has_more_after_last


class TestUnreadCount:
    """Tests for unread accounting."""

    @pytest.mark.asyncio
    async def test_unread_counts_only_the_other_sides_new_messages(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        seller, buyer, item = await _listing(unit_env)
        conversation, _ = await conversations.get_or_create(
            item.id, buyer.to_principal()
        )

        assert await conversations.unread_count(seller.id) == 0

        await messages.send_message(conversation.id, buyer.id, "Hello")
        await messages.send_message(conversation.id, buyer.id, "Price?")

        assert await conversations.unread_count(seller.id) == 2
        assert await conversations.unread_count(buyer.id) == 0

        page, _ = await messages.list_messages(conversation.id, seller.id)

        assert await conversations.unread_count(seller.id) == 0
        assert all(m.is_read_by(seller.id) for m in page)

        await messages.send_message(conversation.id, seller.id, "Fifty")

        assert await conversations.unread_count(buyer.id) == 1

    @pytest.mark.asyncio
    async def test_unread_sums_over_conversations(self, unit_env):
        conversations = await unit_env.get(ConversationService)
        messages = await unit_env.get(MessageService)
        items = await unit_env.get(ItemRepository)
        seller, buyer, item = await _listing(unit_env)
        other_item = await items.save(make_item(seller, "Bookshelf"))
        first, _ = await conversations.get_or_create(item.id, buyer.to_principal())
        second, _ = await conversations.get_or_create(
            other_item.id, buyer.to_principal()
        )

        await messages.send_message(first.id, buyer.id, "About the table")
        await messages.send_message(second.id, buyer.id, "About the shelf")

        assert await conversations.unread_count(seller.id) == 2
        listed = await conversations.list_conversations(seller.id)
        assert [c.id for c in listed] == [second.id, first.id]
