"""Answer entity.

Best-answer state is an explicit ``AnswerAcceptance`` value. The legacy
``is_best_answer`` / ``is_accepted_by_author`` flags are both derived from
it, so they can never disagree.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field, field_validator

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import (
    AnswerAcceptance,
    AnswerId,
    AnswerStatus,
    QuestionId,
    UserId,
)
from bazaar.domain.value.common import ValueObject


class AnswerEdit(ValueObject):
    """Previous revision of an answer's content."""

    content: str
    edited_at: datetime
    reason: Optional[str] = Field(default=None, max_length=200)


class Answer(DomainModel):
    """Answer to a community question."""

    id: AnswerId
    question_id: QuestionId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    vote_score: int = 0
    acceptance: AnswerAcceptance = AnswerAcceptance.NORMAL
    status: AnswerStatus = AnswerStatus.ACTIVE
    edit_history: list[AnswerEdit] = Field(default_factory=list)
    last_edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @computed_field
    @property
    def is_best_answer(self) -> bool:
        return self.acceptance == AnswerAcceptance.BEST

    @computed_field
    @property
    def is_accepted_by_author(self) -> bool:
        return self.acceptance == AnswerAcceptance.BEST

    def revise(
        self,
        content: str,
        reason: Optional[str],
        edited_at: datetime,
        history_limit: int,
    ) -> "Answer":
        """Replace the content, pushing the old revision onto the history.

        The history keeps the newest ``history_limit`` revisions.
        """
        history = [
            *self.edit_history,
            AnswerEdit(content=self.content, edited_at=edited_at, reason=reason),
        ]
        return self.evolve(
            content=content,
            edit_history=history[-history_limit:],
            last_edited_at=edited_at,
            updated_at=edited_at,
        )
