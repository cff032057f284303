"""Integration tests for the Postgres community repositories.

These tests verify the SQL behind view deduplication, best-answer
selection and conversation uniqueness against a migrated database.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from bazaar.domain.model.answer import Answer
from bazaar.domain.model.common import utcnow
from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.question import Question
from bazaar.domain.repository import (
    AnswerRepository,
    ConversationRepository,
    ItemRepository,
    QuestionFilter,
    QuestionRepository,
    UserRepository,
)
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    ConversationId,
    QuestionId,
)
from tests.conftest import make_item, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _stored_user(env, name: str):
    users = await env.get(UserRepository)
    return await users.save(make_user(name))


class TestQuestionRepositoryIntegration:
    """Integration tests for PostgresQuestionRepository."""

    @pytest.mark.asyncio
    async def test_record_view_deduplicates_inside_window(self, integration_env):
        repo = await integration_env.get(QuestionRepository)
        author = await _stored_user(integration_env, "Asker")
        viewer = await _stored_user(integration_env, "Reader")
        question = await repo.save(
            Question(
                id=QuestionId(uuid4()),
                title="Boiler service interval",
                content="How often?",
                author_id=author.id,
            )
        )
        now = utcnow()
        window = timedelta(hours=24)

        first = await repo.record_view(question.id, viewer.id, now, window, 1000)
        repeat = await repo.record_view(
            question.id, viewer.id, now + timedelta(hours=1), window, 1000
        )

        stored = await repo.find_by_id(question.id)
        assert (first, repeat) == (True, False)
        assert stored is not None
        assert stored.view_count == 1

    @pytest.mark.asyncio
    async def test_search_and_tag_filters(self, integration_env):
        repo = await integration_env.get(QuestionRepository)
        author = await _stored_user(integration_env, "Tagger")
        marker = uuid4().hex[:12]
        await repo.save(
            Question(
                id=QuestionId(uuid4()),
                title=f"Damp walls {marker}",
                content="Help",
                author_id=author.id,
                tags=[marker],
            )
        )

        by_search = await repo.find_all(QuestionFilter(search=marker.upper()))
        by_tag = await repo.count(QuestionFilter(tags=[marker, "unrelated"]))

        assert [q.title for q in by_search] == [f"Damp walls {marker}"]
        assert by_tag == 1

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, integration_env):
        repo = await integration_env.get(QuestionRepository)
        author = await _stored_user(integration_env, "Bargain")
        marker = uuid4().hex[:12]
        for title in (f"50%_off {marker}", f"50 kg off {marker}"):
            await repo.save(
                Question(
                    id=QuestionId(uuid4()),
                    title=title,
                    content="Deal?",
                    author_id=author.id,
                )
            )

        found = await repo.find_all(QuestionFilter(search=f"50%_off {marker}"))

        assert [q.title for q in found] == [f"50%_off {marker}"]


class TestAnswerRepositoryIntegration:
    """Integration tests for PostgresAnswerRepository."""

    @pytest.mark.asyncio
    async def test_mark_best_keeps_a_single_best_answer(self, integration_env):
        questions = await integration_env.get(QuestionRepository)
        answers = await integration_env.get(AnswerRepository)
        author = await _stored_user(integration_env, "Owner")
        helper = await _stored_user(integration_env, "Helper")
        question = await questions.save(
            Question(
                id=QuestionId(uuid4()),
                title="Fence boundary",
                content="Whose fence?",
                author_id=author.id,
            )
        )
        first, second = [
            await answers.save(
                Answer(
                    id=AnswerId(uuid4()),
                    question_id=question.id,
                    author_id=helper.id,
                    content=text,
                )
            )
            for text in ("Check the deeds", "Ask the council")
        ]

        await answers.mark_best(question.id, first.id)
        await answers.mark_best(question.id, second.id)

        found = await answers.find_by_question(question.id)
        best = [a.id for a in found if a.acceptance == AnswerAcceptance.BEST]
        assert best == [second.id]


class TestConversationRepositoryIntegration:
    """Integration tests for PostgresConversationRepository."""

    @pytest.mark.asyncio
    async def test_create_if_absent_refuses_duplicate_triple(self, integration_env):
        repo = await integration_env.get(ConversationRepository)
        items = await integration_env.get(ItemRepository)
        seller = await _stored_user(integration_env, "Seller")
        buyer = await _stored_user(integration_env, "Buyer")
        item = await items.save(make_item(seller))

        def conversation() -> Conversation:
            return Conversation(
                id=ConversationId(uuid4()),
                item_id=item.id,
                seller_id=seller.id,
                buyer_id=buyer.id,
            )

        created = await repo.create_if_absent(conversation())
        duplicate = await repo.create_if_absent(conversation())

        assert created is not None
        assert duplicate is None
        found = await repo.find_by_participants(item.id, seller.id, buyer.id)
        assert found is not None
        assert found.id == created.id
