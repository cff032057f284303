"""Response items shared by the question use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bazaar.domain.model.answer import Answer
from bazaar.domain.model.comment import Comment
from bazaar.domain.model.question import Question
from bazaar.domain.value import (
    AnswerStatus,
    QuestionCategory,
    QuestionStatus,
    VoteType,
)


class QuestionItem(BaseModel):
    """Question in listings and write responses."""

    question_id: str
    title: str
    content: str
    author_id: str
    category: QuestionCategory
    tags: list[str]
    status: QuestionStatus
    net_votes: int
    view_count: int
    answer_count: int
    is_answered: bool
    is_pinned: bool
    best_answer_id: Optional[str]
    last_activity: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionItem":
        return cls(
            question_id=str(question.id),
            title=question.title,
            content=question.content,
            author_id=str(question.author_id),
            category=question.category,
            tags=list(question.tags),
            status=question.status,
            net_votes=question.vote_score,
            view_count=question.view_count,
            answer_count=question.answer_count,
            is_answered=question.is_answered,
            is_pinned=question.is_pinned,
            best_answer_id=str(question.best_answer_id) if question.best_answer_id else None,
            last_activity=question.last_activity,
            created_at=question.created_at,
            updated_at=question.updated_at,
        )


class CommentItem(BaseModel):
    """Comment on an answer."""

    comment_id: str
    answer_id: str
    author_id: str
    content: str
    vote_score: int
    created_at: datetime
    user_vote: Optional[VoteType] = None

    @classmethod
    def from_domain(
        cls, comment: Comment, user_vote: Optional[VoteType] = None
    ) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            answer_id=str(comment.answer_id),
            author_id=str(comment.author_id),
            content=comment.content,
            vote_score=comment.vote_score,
            created_at=comment.created_at,
            user_vote=user_vote,
        )


class AnswerItem(BaseModel):
    """Answer with its comment thread."""

    answer_id: str
    question_id: str
    author_id: str
    content: str
    vote_score: int
    status: AnswerStatus
    is_best_answer: bool
    is_accepted_by_author: bool
    edit_count: int
    last_edited_at: Optional[datetime]
    created_at: datetime
    comments: list[CommentItem] = []
    user_vote: Optional[VoteType] = None

    @classmethod
    def from_domain(
        cls,
        answer: Answer,
        comments: Optional[list[CommentItem]] = None,
        user_vote: Optional[VoteType] = None,
    ) -> "AnswerItem":
        return cls(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            author_id=str(answer.author_id),
            content=answer.content,
            vote_score=answer.vote_score,
            status=answer.status,
            is_best_answer=answer.is_best_answer,
            is_accepted_by_author=answer.is_accepted_by_author,
            edit_count=len(answer.edit_history),
            last_edited_at=answer.last_edited_at,
            created_at=answer.created_at,
            comments=comments or [],
            user_vote=user_vote,
        )
