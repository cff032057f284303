"""Unit tests for the question, vote and activity use cases."""

from uuid import uuid4

import pytest

from bazaar.application.usecase.community import (
    UserActivityRequest,
    UserActivityUseCase,
)
from bazaar.application.usecase.question import (
    GetQuestionRequest,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsUseCase,
)
from bazaar.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from bazaar.domain.error import ValidationError
from bazaar.domain.service import AnswerService, CommentService, QuestionService
from bazaar.domain.value import (
    ActivityType,
    QuestionCategory,
    QuestionSortOrder,
    UserId,
    VotableType,
    VoteType,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetQuestion:
    """Tests for GetQuestionUseCase."""

    @pytest.mark.asyncio
    async def test_thread_carries_viewer_votes(self, unit_env):
        questions = await unit_env.get(QuestionService)
        answers = await unit_env.get(AnswerService)
        comments = await unit_env.get(CommentService)
        cast_vote = await unit_env.get(CastVoteUseCase)
        use_case = await unit_env.get(GetQuestionUseCase)
        asker, helper, reader = (UserId(uuid4()) for _ in range(3))

        question = await questions.create_question(asker, "Gas safety check?", "Yearly?")
        answer = await answers.create_answer(question.id, helper, "Yes, every year.")
        comment = await comments.add_comment(answer.id, asker, "Thanks")
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.ANSWER,
                votable_id=str(answer.id),
                voter_id=str(reader),
                vote_type=VoteType.DOWNVOTE,
            )
        )
        await cast_vote.execute(
            CastVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=str(comment.id),
                voter_id=str(reader),
                answer_id=str(answer.id),
            )
        )

        thread = await use_case.execute(
            GetQuestionRequest(question_id=str(question.id), viewer_id=str(reader))
        )

        assert thread.user_vote is None
        assert thread.answers[0].user_vote == VoteType.DOWNVOTE
        assert thread.answers[0].vote_score == -1
        assert thread.answers[0].comments[0].user_vote == VoteType.UPVOTE
        assert thread.question.view_count == 1

    @pytest.mark.asyncio
    async def test_anonymous_reads_do_not_count(self, unit_env):
        questions = await unit_env.get(QuestionService)
        use_case = await unit_env.get(GetQuestionUseCase)
        question = await questions.create_question(UserId(uuid4()), "Quiet?", "Body")

        thread = await use_case.execute(GetQuestionRequest(question_id=str(question.id)))

        assert thread.question.view_count == 0
        assert thread.answers == []


class TestCastVote:
    """Tests for CastVoteUseCase routing."""

    @pytest.mark.asyncio
    async def test_comment_vote_needs_parent_answer(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.COMMENT,
                    votable_id=str(uuid4()),
                    voter_id=str(uuid4()),
                )
            )


class TestListQuestions:
    """Tests for ListQuestionsUseCase."""

    @pytest.mark.asyncio
    async def test_most_answered_sort_and_pages(self, unit_env):
        questions = await unit_env.get(QuestionService)
        answers = await unit_env.get(AnswerService)
        use_case = await unit_env.get(ListQuestionsUseCase)
        author = UserId(uuid4())

        quiet = await questions.create_question(author, "Quiet", "Body")
        busy = await questions.create_question(author, "Busy", "Body")
        for _ in range(2):
            await answers.create_answer(busy.id, UserId(uuid4()), "Answer")
        await answers.create_answer(quiet.id, UserId(uuid4()), "Answer")
        await questions.create_question(author, "Silent", "Body")

        first = await use_case.execute(
            ListQuestionsRequest(sort=QuestionSortOrder.MOST_ANSWERED, limit=2)
        )
        second = await use_case.execute(
            ListQuestionsRequest(sort=QuestionSortOrder.MOST_ANSWERED, limit=2, page=2)
        )

        assert [q.title for q in first.questions] == ["Busy", "Quiet"]
        assert [q.title for q in second.questions] == ["Silent"]
        assert first.pagination.total == 3
        assert not second.pagination.has_next

    @pytest.mark.asyncio
    async def test_search_matches_tags_case_insensitively(self, unit_env):
        questions = await unit_env.get(QuestionService)
        use_case = await unit_env.get(ListQuestionsUseCase)
        author = UserId(uuid4())
        await questions.create_question(
            author, "Mould in bathroom", "Help", QuestionCategory.MAINTENANCE, ["Damp"]
        )
        await questions.create_question(author, "Parking permit", "Help")

        result = await use_case.execute(ListQuestionsRequest(search="  damp "))

        assert [q.title for q in result.questions] == ["Mould in bathroom"]


class TestUserActivity:
    """Tests for UserActivityUseCase."""

    @pytest.mark.asyncio
    async def test_answers_feed_is_paginated(self, unit_env):
        questions = await unit_env.get(QuestionService)
        answers = await unit_env.get(AnswerService)
        use_case = await unit_env.get(UserActivityUseCase)
        helper = UserId(uuid4())
        for title in ("One", "Two", "Three"):
            question = await questions.create_question(UserId(uuid4()), title, "Body")
            await answers.create_answer(question.id, helper, f"Re: {title}")

        result = await use_case.execute(
            UserActivityRequest(
                user_id=str(helper), activity_type=ActivityType.ANSWERS, limit=2
            )
        )

        assert result.questions == []
        assert len(result.answers) == 2
        assert result.pagination is not None
        assert result.pagination.total == 3
