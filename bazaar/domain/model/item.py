"""Item listing entity.

Only the parts of a listing the chat module depends on are modelled here:
the owner (who becomes the seller) and the title used in the first message.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from bazaar.domain.model.common import DomainModel, utcnow
from bazaar.domain.value import ItemId, UserId


class Item(DomainModel):
    """Listed item offered by its owner."""

    id: ItemId
    title: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    owner_id: UserId
    is_available: bool = True
    created_at: datetime = Field(default_factory=utcnow)
