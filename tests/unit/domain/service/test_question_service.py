"""Unit tests for QuestionService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from bazaar.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.model.common import utcnow
from bazaar.domain.repository import QuestionRepository
from bazaar.domain.service import AnswerService, QuestionService
from bazaar.domain.value import (
    FlagReason,
    Principal,
    QuestionCategory,
    QuestionId,
    QuestionStatus,
    Role,
    UserId,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _principal(role: Role = Role.USER, user_id: UserId | None = None) -> Principal:
    return Principal(id=user_id or UserId(uuid4()), role=role, name="Tester")


class TestCreateQuestion:
    """Tests for create_question."""

    @pytest.mark.asyncio
    async def test_creates_active_question_with_clean_tags(self, unit_env):
        service = await unit_env.get(QuestionService)
        author = UserId(uuid4())

        question = await service.create_question(
            author,
            "  First flat in Lisbon?  ",
            "What should I look out for?",
            category=QuestionCategory.PROPERTY_BUYING,
            tags=["lisbon", " lisbon ", "", "mortgage"],
        )

        assert question.status == QuestionStatus.ACTIVE
        assert question.title == "First flat in Lisbon?"
        assert question.tags == ["lisbon", "mortgage"]
        assert question.vote_score == 0
        assert question.answer_count == 0
        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored == question

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected(self, unit_env):
        service = await unit_env.get(QuestionService)

        with pytest.raises(ValidationError):
            await service.create_question(UserId(uuid4()), "   ", "Body")

    @pytest.mark.asyncio
    async def test_overlong_content_is_rejected(self, unit_env):
        service = await unit_env.get(QuestionService)

        with pytest.raises(ValidationError):
            await service.create_question(UserId(uuid4()), "Title", "x" * 5001)


class TestUpdateQuestion:
    """Tests for update_question."""

    @pytest.mark.asyncio
    async def test_author_can_edit_selected_fields(self, unit_env):
        service = await unit_env.get(QuestionService)
        author = UserId(uuid4())
        question = await service.create_question(author, "Title", "Body", tags=["a"])

        updated = await service.update_question(question.id, author, content="New body")

        assert updated.content == "New body"
        assert updated.title == "Title"
        assert updated.tags == ["a"]

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        with pytest.raises(NotAuthorizedError):
            await service.update_question(question.id, UserId(uuid4()), title="Hijack")

    @pytest.mark.asyncio
    async def test_invalid_edit_leaves_question_unchanged(self, unit_env):
        service = await unit_env.get(QuestionService)
        author = UserId(uuid4())
        question = await service.create_question(author, "Title", "Body")

        with pytest.raises(ValidationError):
            await service.update_question(question.id, author, title="t" * 301)

        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.title == "Title"


class TestDeleteQuestion:
    """Tests for delete_question."""

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_question(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        deleted = await service.delete_question(question.id, _principal(Role.ADMIN))

        assert deleted.status == QuestionStatus.DELETED
        with pytest.raises(NotFoundError):
            await service.get_question(question.id)

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        with pytest.raises(ForbiddenError):
            await service.delete_question(question.id, _principal())


class TestChangeStatus:
    """Tests for change_status."""

    @pytest.mark.asyncio
    async def test_admin_moves_question_to_pending_review_and_back(self, unit_env):
        service = await unit_env.get(QuestionService)
        admin = _principal(Role.ADMIN)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        reviewed = await service.change_status(
            question.id, admin, QuestionStatus.PENDING_REVIEW
        )
        restored = await service.change_status(question.id, admin, QuestionStatus.ACTIVE)

        assert reviewed.status == QuestionStatus.PENDING_REVIEW
        assert restored.status == QuestionStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_deleted_is_terminal(self, unit_env):
        service = await unit_env.get(QuestionService)
        admin = _principal(Role.ADMIN)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")
        await service.change_status(question.id, admin, QuestionStatus.DELETED)

        with pytest.raises(InvalidOperationError):
            await service.change_status(question.id, admin, QuestionStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_non_admin_is_forbidden(self, unit_env):
        service = await unit_env.get(QuestionService)
        author = UserId(uuid4())
        question = await service.create_question(author, "Title", "Body")

        with pytest.raises(ForbiddenError):
            await service.change_status(
                question.id, _principal(user_id=author), QuestionStatus.CLOSED
            )


class TestFlagQuestion:
    """Tests for flag_question."""

    @pytest.mark.asyncio
    async def test_flag_is_stored_and_status_unchanged(self, unit_env):
        service = await unit_env.get(QuestionService)
        repo = await unit_env.get(QuestionRepository)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")
        reporter = UserId(uuid4())

        flag = await service.flag_question(
            question.id, reporter, FlagReason.SPAM, description="Looks like an ad"
        )

        assert flag.reason == FlagReason.SPAM
        assert await repo.find_flags(question.id) == [flag]
        stored = await repo.find_by_id(question.id)
        assert stored.status == QuestionStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_flagging_unknown_question_fails(self, unit_env):
        service = await unit_env.get(QuestionService)

        with pytest.raises(NotFoundError):
            await service.flag_question(
                QuestionId(uuid4()), UserId(uuid4()), FlagReason.OTHER
            )


class TestViewQuestion:
    """Tests for view counting."""

    @pytest.mark.asyncio
    async def test_repeat_views_within_window_count_once(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")
        viewer = UserId(uuid4())

        first = await service.view_question(question.id, viewer)
        second = await service.view_question(question.id, viewer)

        assert first.view_count == 1
        assert second.view_count == 1

    @pytest.mark.asyncio
    async def test_distinct_viewers_each_count(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        for _ in range(3):
            await service.view_question(question.id, UserId(uuid4()))

        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.view_count == 3

    @pytest.mark.asyncio
    async def test_anonymous_views_are_not_counted(self, unit_env):
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")

        viewed = await service.view_question(question.id, None)

        assert viewed.view_count == 0

    @pytest.mark.asyncio
    async def test_view_after_window_counts_again(self, unit_env):
        repo = await unit_env.get(QuestionRepository)
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")
        viewer = UserId(uuid4())
        window = timedelta(hours=24)
        long_ago = utcnow() - timedelta(hours=25)

        assert await repo.record_view(question.id, viewer, long_ago, window, 1000)
        assert await repo.record_view(question.id, viewer, utcnow(), window, 1000)

        stored = await repo.find_by_id(question.id)
        assert stored.view_count == 2

    @pytest.mark.asyncio
    async def test_view_history_keeps_newest_entries(self, unit_env):
        repo = await unit_env.get(QuestionRepository)
        service = await unit_env.get(QuestionService)
        question = await service.create_question(UserId(uuid4()), "Title", "Body")
        viewers = [UserId(uuid4()) for _ in range(5)]

        for viewer in viewers:
            await repo.record_view(
                question.id, viewer, utcnow(), timedelta(hours=24), history_limit=3
            )

        history = repo.view_history(question.id)
        assert [viewer for viewer, _ in history] == viewers[-3:]


class TestCommunityStats:
    """Tests for community_stats."""

    @pytest.mark.asyncio
    async def test_totals_and_category_breakdown(self, unit_env):
        service = await unit_env.get(QuestionService)
        answer_service = await unit_env.get(AnswerService)
        author = UserId(uuid4())
        q1 = await service.create_question(
            author, "Q1", "Body", category=QuestionCategory.RENTAL
        )
        await service.create_question(
            author, "Q2", "Body", category=QuestionCategory.RENTAL
        )
        await service.create_question(
            author, "Q3", "Body", category=QuestionCategory.LEGAL
        )
        gone = await service.create_question(author, "Q4", "Body")
        await service.delete_question(gone.id, _principal(user_id=author))
        answer = await answer_service.create_answer(q1.id, UserId(uuid4()), "Answer")
        await answer_service.mark_best_answer(answer.id, author)

        question_stats, answer_stats = await service.community_stats(
            _principal(Role.ADMIN)
        )

        assert question_stats.total_questions == 3
        assert question_stats.active_questions == 3
        assert question_stats.answered_questions == 1
        assert [(c.category, c.count) for c in question_stats.category_breakdown] == [
            (QuestionCategory.RENTAL, 2),
            (QuestionCategory.LEGAL, 1),
        ]
        assert answer_stats.total_answers == 1
        assert answer_stats.best_answers == 1

    @pytest.mark.asyncio
    async def test_non_admin_is_forbidden(self, unit_env):
        service = await unit_env.get(QuestionService)

        with pytest.raises(ForbiddenError):
            await service.community_stats(_principal())
