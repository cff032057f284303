"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest

from bazaar.domain.error import NotFoundError, SelfVoteError
from bazaar.domain.model.answer import Answer
from bazaar.domain.model.comment import Comment
from bazaar.domain.model.question import Question
from bazaar.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
    VoteRepository,
)
from bazaar.domain.service import VoteService
from bazaar.domain.value import (
    AnswerId,
    CommentId,
    QuestionId,
    QuestionStatus,
    UserId,
    VotableType,
    VoteType,
)
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories, no database needed
unit_env = create_env_fixture()


async def _question(unit_env, author_id: UserId | None = None) -> Question:
    repo = await unit_env.get(QuestionRepository)
    return await repo.save(
        Question(
            id=QuestionId(uuid4()),
            title="Is now a good time to buy?",
            content="Rates keep moving and I cannot decide.",
            author_id=author_id or UserId(uuid4()),
        )
    )


async def _answer(unit_env, question: Question) -> Answer:
    repo = await unit_env.get(AnswerRepository)
    return await repo.save(
        Answer(
            id=AnswerId(uuid4()),
            question_id=question.id,
            author_id=UserId(uuid4()),
            content="Wait for the spring market.",
        )
    )


class TestVoteQuestion:
    """Tests for vote_question."""

    @pytest.mark.asyncio
    async def test_first_upvote_sets_vote_and_score(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _question(unit_env)
        voter = UserId(uuid4())

        outcome = await vote_service.vote_question(question.id, voter, VoteType.UPVOTE)

        assert outcome.vote == VoteType.UPVOTE
        assert outcome.tally.upvotes == 1
        assert outcome.tally.score == 1
        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.vote_score == 1

    @pytest.mark.asyncio
    async def test_repeating_a_vote_retracts_it(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _question(unit_env)
        voter = UserId(uuid4())

        await vote_service.vote_question(question.id, voter, VoteType.UPVOTE)
        outcome = await vote_service.vote_question(question.id, voter, VoteType.UPVOTE)

        assert outcome.vote is None
        assert outcome.tally.score == 0
        vote_repo = await unit_env.get(VoteRepository)
        assert (
            await vote_repo.find_by_user_and_votable(
                voter, VotableType.QUESTION, question.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_opposite_vote_replaces_the_current_one(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _question(unit_env)
        voter = UserId(uuid4())

        await vote_service.vote_question(question.id, voter, VoteType.UPVOTE)
        outcome = await vote_service.vote_question(
            question.id, voter, VoteType.DOWNVOTE
        )

        assert outcome.vote == VoteType.DOWNVOTE
        assert outcome.tally.upvotes == 0
        assert outcome.tally.downvotes == 1
        assert outcome.tally.score == -1

    @pytest.mark.asyncio
    async def test_score_matches_ledger_after_mixed_votes(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _question(unit_env)
        voters = [UserId(uuid4()) for _ in range(5)]

        for voter in voters[:3]:
            await vote_service.vote_question(question.id, voter, VoteType.UPVOTE)
        for voter in voters[3:]:
            await vote_service.vote_question(question.id, voter, VoteType.DOWNVOTE)
        # One upvoter changes their mind
        await vote_service.vote_question(question.id, voters[0], VoteType.DOWNVOTE)

        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.vote_score == 2 - 3

    @pytest.mark.asyncio
    async def test_concurrent_voters_are_all_counted(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _question(unit_env)
        voters = [UserId(uuid4()) for _ in range(10)]

        await asyncio.gather(
            *(
                vote_service.vote_question(question.id, voter, VoteType.UPVOTE)
                for voter in voters
            )
        )

        stored = await (await unit_env.get(QuestionRepository)).find_by_id(question.id)
        assert stored.vote_score == 10

    @pytest.mark.asyncio
    async def test_author_cannot_vote_on_own_question(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = UserId(uuid4())
        question = await _question(unit_env, author_id=author)

        with pytest.raises(SelfVoteError):
            await vote_service.vote_question(question.id, author, VoteType.UPVOTE)

    @pytest.mark.asyncio
    async def test_deleted_question_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _question(unit_env)
        await question_repo.update(question.evolve(status=QuestionStatus.DELETED))

        with pytest.raises(NotFoundError):
            await vote_service.vote_question(
                question.id, UserId(uuid4()), VoteType.UPVOTE
            )


class TestVoteAnswer:
    """Tests for vote_answer."""

    @pytest.mark.asyncio
    async def test_downvote_lowers_answer_score(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        answer = await _answer(unit_env, await _question(unit_env))

        outcome = await vote_service.vote_answer(
            answer.id, UserId(uuid4()), VoteType.DOWNVOTE
        )

        assert outcome.tally.score == -1
        stored = await (await unit_env.get(AnswerRepository)).find_by_id(answer.id)
        assert stored.vote_score == -1

    @pytest.mark.asyncio
    async def test_author_cannot_vote_on_own_answer(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        answer = await _answer(unit_env, await _question(unit_env))

        with pytest.raises(SelfVoteError):
            await vote_service.vote_answer(answer.id, answer.author_id, VoteType.UPVOTE)

    @pytest.mark.asyncio
    async def test_unknown_answer_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.vote_answer(
                AnswerId(uuid4()), UserId(uuid4()), VoteType.UPVOTE
            )


class TestVoteComment:
    """Tests for vote_comment."""

    @pytest.mark.asyncio
    async def test_comment_upvote_toggles(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        answer = await _answer(unit_env, await _question(unit_env))
        comment = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                answer_id=answer.id,
                author_id=UserId(uuid4()),
                content="Agreed.",
            )
        )
        voter = UserId(uuid4())

        first = await vote_service.vote_comment(answer.id, comment.id, voter)
        second = await vote_service.vote_comment(answer.id, comment.id, voter)

        assert first.vote == VoteType.UPVOTE
        assert first.tally.upvotes == 1
        assert second.vote is None
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.vote_score == 0

    @pytest.mark.asyncio
    async def test_comment_author_may_upvote_own_comment(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        answer = await _answer(unit_env, await _question(unit_env))
        author = UserId(uuid4())
        comment = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                answer_id=answer.id,
                author_id=author,
                content="Self-promotion.",
            )
        )

        outcome = await vote_service.vote_comment(answer.id, comment.id, author)

        assert outcome.vote == VoteType.UPVOTE

    @pytest.mark.asyncio
    async def test_comment_of_another_answer_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        question = await _question(unit_env)
        answer = await _answer(unit_env, question)
        other_answer = await _answer(unit_env, question)
        comment = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                answer_id=other_answer.id,
                author_id=UserId(uuid4()),
                content="Wrong thread.",
            )
        )

        with pytest.raises(NotFoundError):
            await vote_service.vote_comment(answer.id, comment.id, UserId(uuid4()))


class TestVotesInsideDeletedQuestion:
    """Answers and comments of a deleted question take no votes."""

    @pytest.mark.asyncio
    async def test_answer_vote_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _question(unit_env)
        answer = await _answer(unit_env, question)
        await question_repo.update(question.evolve(status=QuestionStatus.DELETED))

        with pytest.raises(NotFoundError):
            await vote_service.vote_answer(answer.id, UserId(uuid4()), VoteType.UPVOTE)

        votes = await (await unit_env.get(VoteRepository)).tally(
            VotableType.ANSWER, answer.id
        )
        assert votes.score == 0

    @pytest.mark.asyncio
    async def test_comment_vote_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        comment_repo = await unit_env.get(CommentRepository)
        question = await _question(unit_env)
        answer = await _answer(unit_env, question)
        comment = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                answer_id=answer.id,
                author_id=UserId(uuid4()),
                content="Still here?",
            )
        )
        await question_repo.update(question.evolve(status=QuestionStatus.DELETED))

        with pytest.raises(NotFoundError):
            await vote_service.vote_comment(answer.id, comment.id, UserId(uuid4()))
