"""Unit tests for AnswerService and CommentService."""

import asyncio
from uuid import uuid4

import pytest

from bazaar.domain.error import (
    ForbiddenError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from bazaar.domain.repository import AnswerRepository, QuestionRepository
from bazaar.domain.service import AnswerService, CommentService, QuestionService
from bazaar.domain.value import (
    AnswerId,
    Principal,
    QuestionStatus,
    Role,
    UserId,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _ask(unit_env, author: UserId):
    service = await unit_env.get(QuestionService)
    return await service.create_question(author, "Which suburb?", "Good schools?")


class TestCreateAnswer:
    """Tests for create_answer."""

    @pytest.mark.asyncio
    async def test_answer_bumps_question_counters(self, unit_env):
        service = await unit_env.get(AnswerService)
        question = await _ask(unit_env, UserId(uuid4()))

        answer = await service.create_answer(question.id, UserId(uuid4()), "Try Northcote")

        assert answer.content == "Try Northcote"
        assert not answer.is_best_answer
        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.answer_count == 1
        assert stored.is_answered
        assert stored.last_activity >= question.last_activity

    @pytest.mark.asyncio
    async def test_closed_question_takes_no_answers(self, unit_env):
        service = await unit_env.get(AnswerService)
        questions = await unit_env.get(QuestionService)
        question = await _ask(unit_env, UserId(uuid4()))
        await questions.change_status(
            question.id,
            Principal(id=UserId(uuid4()), role=Role.ADMIN, name="Mod"),
            QuestionStatus.CLOSED,
        )

        with pytest.raises(NotFoundError):
            await service.create_answer(question.id, UserId(uuid4()), "Too late")

    @pytest.mark.asyncio
    async def test_empty_answer_is_rejected(self, unit_env):
        service = await unit_env.get(AnswerService)
        question = await _ask(unit_env, UserId(uuid4()))

        with pytest.raises(ValidationError):
            await service.create_answer(question.id, UserId(uuid4()), "   ")

        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.answer_count == 0


class TestEditAnswer:
    """Tests for edit_answer."""

    @pytest.mark.asyncio
    async def test_edit_keeps_previous_revision(self, unit_env):
        service = await unit_env.get(AnswerService)
        author = UserId(uuid4())
        answer = await service.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, author, "Version one"
        )

        edited = await service.edit_answer(answer.id, author, "Version two", "typo")

        assert edited.content == "Version two"
        assert [e.content for e in edited.edit_history] == ["Version one"]
        assert edited.edit_history[0].reason == "typo"
        assert edited.last_edited_at is not None

    @pytest.mark.asyncio
    async def test_edit_history_is_bounded(self, unit_env):
        service = await unit_env.get(AnswerService)
        author = UserId(uuid4())
        answer = await service.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, author, "Revision 0"
        )

        for n in range(1, 13):
            answer = await service.edit_answer(answer.id, author, f"Revision {n}")

        assert len(answer.edit_history) == 10
        assert answer.edit_history[0].content == "Revision 2"
        assert answer.edit_history[-1].content == "Revision 11"

    @pytest.mark.asyncio
    async def test_identical_content_is_a_no_op(self, unit_env):
        service = await unit_env.get(AnswerService)
        author = UserId(uuid4())
        answer = await service.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, author, "Same"
        )

        unchanged = await service.edit_answer(answer.id, author, "Same")

        assert unchanged.edit_history == []

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(self, unit_env):
        service = await unit_env.get(AnswerService)
        answer = await service.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, UserId(uuid4()), "Mine"
        )

        with pytest.raises(NotAuthorizedError):
            await service.edit_answer(answer.id, UserId(uuid4()), "Not yours")


class TestMarkBestAnswer:
    """Tests for mark_best_answer."""

    @pytest.mark.asyncio
    async def test_switching_best_answer_clears_previous(self, unit_env):
        service = await unit_env.get(AnswerService)
        answers = await unit_env.get(AnswerRepository)
        asker = UserId(uuid4())
        question = await _ask(unit_env, asker)
        first = await service.create_answer(question.id, UserId(uuid4()), "First")
        second = await service.create_answer(question.id, UserId(uuid4()), "Second")

        await service.mark_best_answer(first.id, asker)
        marked = await service.mark_best_answer(second.id, asker)

        assert marked.is_best_answer
        best = [a for a in await answers.find_by_question(question.id) if a.is_best_answer]
        assert [a.id for a in best] == [second.id]
        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.best_answer_id == second.id

    @pytest.mark.asyncio
    async def test_concurrent_marks_leave_one_best_answer(self, unit_env):
        service = await unit_env.get(AnswerService)
        answers = await unit_env.get(AnswerRepository)
        asker = UserId(uuid4())
        question = await _ask(unit_env, asker)
        candidates = [
            await service.create_answer(question.id, UserId(uuid4()), f"Answer {n}")
            for n in range(5)
        ]

        await asyncio.gather(
            *(service.mark_best_answer(a.id, asker) for a in candidates)
        )

        best = [a for a in await answers.find_by_question(question.id) if a.is_best_answer]
        assert len(best) == 1
        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.best_answer_id == best[0].id

    @pytest.mark.asyncio
    async def test_only_question_author_may_mark(self, unit_env):
        service = await unit_env.get(AnswerService)
        question = await _ask(unit_env, UserId(uuid4()))
        answer = await service.create_answer(question.id, UserId(uuid4()), "Answer")

        with pytest.raises(ForbiddenError):
            await service.mark_best_answer(answer.id, answer.author_id)

    @pytest.mark.asyncio
    async def test_unknown_answer_is_not_found(self, unit_env):
        service = await unit_env.get(AnswerService)

        with pytest.raises(NotFoundError):
            await service.mark_best_answer(AnswerId(uuid4()), UserId(uuid4()))


class TestAddComment:
    """Tests for CommentService.add_comment."""

    @pytest.mark.asyncio
    async def test_comment_is_attached_to_answer(self, unit_env):
        answers = await unit_env.get(AnswerService)
        comments = await unit_env.get(CommentService)
        answer = await answers.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, UserId(uuid4()), "Answer"
        )
        author = UserId(uuid4())

        comment = await comments.add_comment(answer.id, author, " Thanks! ")

        assert comment.answer_id == answer.id
        assert comment.author_id == author
        assert comment.content == "Thanks!"
        assert comment.vote_score == 0

    @pytest.mark.asyncio
    async def test_overlong_comment_is_rejected(self, unit_env):
        answers = await unit_env.get(AnswerService)
        comments = await unit_env.get(CommentService)
        answer = await answers.create_answer(
            (await _ask(unit_env, UserId(uuid4()))).id, UserId(uuid4()), "Answer"
        )

        with pytest.raises(ValidationError):
            await comments.add_comment(answer.id, UserId(uuid4()), "x" * 1001)

    @pytest.mark.asyncio
    async def test_comment_on_unknown_answer_fails(self, unit_env):
        comments = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comments.add_comment(AnswerId(uuid4()), UserId(uuid4()), "Hello")


class TestDeletedQuestionThread:
    """A deleted question closes its answers to edits and comments."""

    async def _answer_then_delete(self, unit_env, author: UserId):
        answers = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _ask(unit_env, UserId(uuid4()))
        answer = await answers.create_answer(question.id, author, "Before deletion")
        stored = await question_repo.find_by_id(question.id)
        await question_repo.update(stored.evolve(status=QuestionStatus.DELETED))
        return answer

    @pytest.mark.asyncio
    async def test_edit_is_not_found(self, unit_env):
        service = await unit_env.get(AnswerService)
        author = UserId(uuid4())
        answer = await self._answer_then_delete(unit_env, author)

        with pytest.raises(NotFoundError):
            await service.edit_answer(answer.id, author, "After deletion")

        stored = await (await unit_env.get(AnswerRepository)).find_by_id(answer.id)
        assert stored.content == "Before deletion"

    @pytest.mark.asyncio
    async def test_comment_is_not_found(self, unit_env):
        comments = await unit_env.get(CommentService)
        answer = await self._answer_then_delete(unit_env, UserId(uuid4()))

        with pytest.raises(NotFoundError):
            await comments.add_comment(answer.id, UserId(uuid4()), "Anyone?")
