"""Item repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from bazaar.domain.model.item import Item
from bazaar.domain.value import ItemId


class ItemRepository(ABC):
    """Read access to item listings needed by the chat module."""

    @abstractmethod
    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID.

        Args:
            item_id: The item's unique identifier

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, item: Item) -> Item:
        """Save an item (create or update).

        Args:
            item: The item to save

        Returns:
            The saved item
        """
        pass
