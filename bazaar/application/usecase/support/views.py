"""Response items shared by the support desk use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bazaar.domain.model.support_query import SupportQuery
from bazaar.domain.value import SupportCategory, SupportPriority, SupportStatus


class AdminResponseItem(BaseModel):
    """Administrator's reply."""

    message: str
    responded_by: str
    responded_at: datetime


class SatisfactionItem(BaseModel):
    """Owner's rating of a resolved query."""

    rating: int
    feedback: Optional[str]
    rated_at: datetime


class SupportQueryItem(BaseModel):
    """Support desk query."""

    query_id: str
    user_id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    subject: str
    message: str
    category: SupportCategory
    priority: SupportPriority
    status: SupportStatus
    admin_response: Optional[AdminResponseItem]
    assigned_to: Optional[str]
    tags: list[str]
    resolved_at: Optional[datetime]
    satisfaction: Optional[SatisfactionItem]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, query: SupportQuery) -> "SupportQueryItem":
        response = query.admin_response
        satisfaction = query.satisfaction
        return cls(
            query_id=str(query.id),
            user_id=str(query.user_id),
            name=query.name,
            email=query.email,
            phone=query.phone,
            subject=query.subject,
            message=query.message,
            category=query.category,
            priority=query.priority,
            status=query.status,
            admin_response=(
                AdminResponseItem(
                    message=response.message,
                    responded_by=str(response.responded_by),
                    responded_at=response.responded_at,
                )
                if response
                else None
            ),
            assigned_to=str(query.assigned_to) if query.assigned_to else None,
            tags=list(query.tags),
            resolved_at=query.resolved_at,
            satisfaction=(
                SatisfactionItem(
                    rating=satisfaction.rating,
                    feedback=satisfaction.feedback,
                    rated_at=satisfaction.rated_at,
                )
                if satisfaction
                else None
            ),
            created_at=query.created_at,
            updated_at=query.updated_at,
        )
