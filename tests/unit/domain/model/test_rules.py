"""Unit tests for value-level rules: toggles, state machines, pagination."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from bazaar.application.usecase.pagination import PageInfo, offset_for
from bazaar.domain.model.conversation import Conversation
from bazaar.domain.model.vote import VoteTally, resolve_toggle
from bazaar.domain.value import (
    ConversationId,
    ItemId,
    QuestionStatus,
    SupportStatus,
    UserId,
    VotableType,
    VoteType,
)


class TestResolveToggle:
    """Tests for the vote toggle rule."""

    @pytest.mark.parametrize(
        ("current", "requested", "expected"),
        [
            (None, VoteType.UPVOTE, VoteType.UPVOTE),
            (None, VoteType.DOWNVOTE, VoteType.DOWNVOTE),
            (VoteType.UPVOTE, VoteType.UPVOTE, None),
            (VoteType.DOWNVOTE, VoteType.DOWNVOTE, None),
            (VoteType.UPVOTE, VoteType.DOWNVOTE, VoteType.DOWNVOTE),
            (VoteType.DOWNVOTE, VoteType.UPVOTE, VoteType.UPVOTE),
        ],
    )
    def test_toggle(self, current, requested, expected):
        assert resolve_toggle(current, requested) == expected

    @pytest.mark.parametrize("vote_type", list(VoteType))
    def test_same_vote_twice_leaves_no_vote(self, vote_type):
        assert resolve_toggle(resolve_toggle(None, vote_type), vote_type) is None

    def test_score_is_upvotes_minus_downvotes(self):
        assert VoteTally(upvotes=4, downvotes=6).score == -2

    def test_comments_take_no_downvotes(self):
        assert not VotableType.COMMENT.allows_downvotes
        assert VotableType.ANSWER.allows_downvotes


class TestQuestionStatusTransitions:
    """Tests for the question moderation state machine."""

    def test_deleted_is_terminal(self):
        assert not any(
            QuestionStatus.DELETED.can_transition_to(target) for target in QuestionStatus
        )

    def test_review_can_restore_question(self):
        assert QuestionStatus.ACTIVE.can_transition_to(QuestionStatus.PENDING_REVIEW)
        assert QuestionStatus.PENDING_REVIEW.can_transition_to(QuestionStatus.ACTIVE)

    def test_closed_question_can_be_reopened(self):
        assert QuestionStatus.CLOSED.can_transition_to(QuestionStatus.ACTIVE)
        assert not QuestionStatus.CLOSED.can_transition_to(
            QuestionStatus.PENDING_REVIEW
        )


class TestSupportStatusTransitions:
    """Tests for the linear support workflow."""

    def test_forward_moves_and_skips_are_allowed(self):
        assert SupportStatus.PENDING.can_transition_to(SupportStatus.IN_PROGRESS)
        assert SupportStatus.PENDING.can_transition_to(SupportStatus.RESOLVED)
        assert SupportStatus.IN_PROGRESS.can_transition_to(SupportStatus.CLOSED)

    def test_backward_moves_are_rejected(self):
        assert not SupportStatus.RESOLVED.can_transition_to(SupportStatus.PENDING)
        assert not SupportStatus.IN_PROGRESS.can_transition_to(SupportStatus.PENDING)

    def test_closed_is_terminal(self):
        assert not any(
            SupportStatus.CLOSED.can_transition_to(target) for target in SupportStatus
        )


class TestConversationParticipants:
    """Tests for conversation participant rules."""

    def test_seller_and_buyer_must_differ(self):
        user = UserId(uuid4())
        with pytest.raises(PydanticValidationError):
            Conversation(
                id=ConversationId(uuid4()),
                item_id=ItemId(uuid4()),
                seller_id=user,
                buyer_id=user,
            )

    def test_last_read_is_tracked_per_side(self):
        seller, buyer = UserId(uuid4()), UserId(uuid4())
        conversation = Conversation(
            id=ConversationId(uuid4()),
            item_id=ItemId(uuid4()),
            seller_id=seller,
            buyer_id=buyer,
        )
        read = conversation.model_copy(
            update={"seller_last_read_at": conversation.created_at}
        )

        assert read.last_read_at(seller) == conversation.created_at
        assert read.last_read_at(buyer) is None
        assert read.other_participant(seller) == buyer
        with pytest.raises(ValueError):
            read.role_of(UserId(uuid4()))


class TestPageInfo:
    """Tests for page-number pagination."""

    def test_middle_page(self):
        info = PageInfo.build(page=2, limit=10, total=25)

        assert info.total_pages == 3
        assert info.has_next
        assert info.has_prev

    def test_last_page(self):
        info = PageInfo.build(page=3, limit=10, total=25)

        assert not info.has_next
        assert offset_for(3, 10) == 20

    def test_empty_result(self):
        info = PageInfo.build(page=1, limit=10, total=0)

        assert info.total_pages == 0
        assert not info.has_next
        assert not info.has_prev
