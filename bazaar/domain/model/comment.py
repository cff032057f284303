"""Comment entity.

Comments hang off answers as an owned child collection keyed by answer id.
They only accept upvotes, so ``vote_score`` is the upvote count.
"""

from datetime import datetime

from pydantic import Field, field_validator

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import AnswerId, CommentId, UserId


class Comment(DomainModel):
    """Comment on an answer."""

    id: CommentId
    answer_id: AnswerId
    author_id: UserId
    content: str = Field(min_length=1, max_length=1000)
    vote_score: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v
