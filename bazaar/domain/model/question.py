"""Question aggregate root.

Questions own their vote tally, view history and moderation flags. Answers
reference the question by id and are counted on it, so ``is_answered`` is
derived from the answer count instead of being stored separately.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field, field_validator

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import (
    AnswerId,
    FlagReason,
    QuestionCategory,
    QuestionId,
    QuestionStatus,
    UserId,
)

MAX_TAG_LENGTH = 50


class Question(DomainModel):
    """Community question."""

    id: QuestionId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=5000)
    author_id: UserId
    category: QuestionCategory = QuestionCategory.GENERAL
    tags: list[str] = Field(default_factory=list)
    vote_score: int = 0
    view_count: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    best_answer_id: Optional[AnswerId] = None
    status: QuestionStatus = QuestionStatus.ACTIVE
    is_pinned: bool = False
    last_activity: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: object) -> object:
        """Trim tags, drop blanks and duplicates while keeping order."""
        if not isinstance(v, (list, tuple)):
            return v
        seen: list[str] = []
        for tag in v:
            cleaned = str(tag).strip()
            if not cleaned:
                continue
            if len(cleaned) > MAX_TAG_LENGTH:
                raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
            if cleaned not in seen:
                seen.append(cleaned)
        return seen

    @computed_field
    @property
    def is_answered(self) -> bool:
        return self.answer_count > 0

    @property
    def is_deleted(self) -> bool:
        return self.status == QuestionStatus.DELETED


class QuestionFlag(DomainModel):
    """Moderation report filed against a question."""

    question_id: QuestionId
    reporter_id: UserId
    reason: FlagReason
    description: Optional[str] = Field(default=None, max_length=500)
    flagged_at: datetime = Field(default_factory=utcnow)
    resolved: bool = False
