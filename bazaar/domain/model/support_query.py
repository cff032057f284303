"""Support desk query (ticket) aggregate.

Users file queries; administrators triage, respond and resolve them. Once a
query is resolved its owner may leave a satisfaction rating.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import (
    SupportCategory,
    SupportPriority,
    SupportQueryId,
    SupportStatus,
    UserId,
)
from bazaar.domain.value.common import ValueObject


class AdminResponse(ValueObject):
    """Administrator's reply to a query."""

    message: str = Field(min_length=1, max_length=2000)
    responded_by: UserId
    responded_at: datetime


class SatisfactionRating(ValueObject):
    """Owner's rating of how a resolved query was handled."""

    rating: int = Field(ge=1, le=5)
    feedback: Optional[str] = Field(default=None, max_length=500)
    rated_at: datetime


class SupportQuery(DomainModel):
    """Support ticket submitted by a user."""

    id: SupportQueryId
    user_id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=2000)
    category: SupportCategory = SupportCategory.GENERAL
    priority: SupportPriority = SupportPriority.MEDIUM
    status: SupportStatus = SupportStatus.PENDING
    admin_response: Optional[AdminResponse] = None
    assigned_to: Optional[UserId] = None
    tags: list[str] = Field(default_factory=list)
    resolved_at: Optional[datetime] = None
    satisfaction: Optional[SatisfactionRating] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
