"""In-memory item repository for testing."""

from typing import Optional

from bazaar.domain.model.item import Item
from bazaar.domain.repository.item import ItemRepository
from bazaar.domain.value import ItemId


class InMemoryItemRepository(ItemRepository):
    """In-memory implementation of ItemRepository for testing."""

    def __init__(self) -> None:
        self._items: dict[ItemId, Item] = {}

    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID."""
        return self._items.get(item_id)

    async def save(self, item: Item) -> Item:
        """Save an item."""
        self._items[item.id] = item
        return item
