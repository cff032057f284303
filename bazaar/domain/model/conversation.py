"""Conversation aggregate root.

A conversation connects the buyer and the seller of one item. The triple
(item, seller, buyer) is unique, and each side keeps its own last-read
timestamp from which unread counts are derived.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import ConversationId, ItemId, ParticipantRole, UserId


class Conversation(DomainModel):
    """Buyer/seller conversation about an item."""

    id: ConversationId
    item_id: ItemId
    seller_id: UserId
    buyer_id: UserId
    last_message: str = ""
    last_message_at: datetime = Field(default_factory=utcnow)
    is_active: bool = True
    seller_last_read_at: Optional[datetime] = None
    buyer_last_read_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_participants(self) -> "Conversation":
        if self.seller_id == self.buyer_id:
            raise ValueError("Seller and buyer must be different users")
        return self

    def is_participant(self, user_id: UserId) -> bool:
        return user_id in (self.seller_id, self.buyer_id)

    def role_of(self, user_id: UserId) -> ParticipantRole:
        """Side of the conversation ``user_id`` is on.

        Raises:
            ValueError: If the user is not a participant
        """
        if user_id == self.seller_id:
            return ParticipantRole.SELLER
        if user_id == self.buyer_id:
            return ParticipantRole.BUYER
        raise ValueError(f"User {user_id} is not part of conversation {self.id}")

    def other_participant(self, user_id: UserId) -> UserId:
        if self.role_of(user_id) == ParticipantRole.SELLER:
            return self.buyer_id
        return self.seller_id

    def last_read_at(self, user_id: UserId) -> Optional[datetime]:
        if self.role_of(user_id) == ParticipantRole.SELLER:
            return self.seller_last_read_at
        return self.buyer_last_read_at
