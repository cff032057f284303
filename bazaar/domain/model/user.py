"""User aggregate root.

Users are created by the account flows of the marketplace; the community
and chat modules only ever read them to resolve the current principal.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import Principal, Role, UserId


class User(DomainModel):
    """Marketplace user or administrator."""

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    role: Role = Role.USER
    is_verified: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    def to_principal(self) -> Principal:
        """Identity used for authorization checks."""
        return Principal(
            id=self.id, role=self.role, name=self.name, is_verified=self.is_verified
        )
