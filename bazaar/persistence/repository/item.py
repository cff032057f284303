"""PostgreSQL implementation of Item repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.domain.model import Item
from bazaar.domain.repository import ItemRepository
from bazaar.domain.value import ItemId
from bazaar.persistence.mappers import item_to_dict, row_to_item
from bazaar.persistence.tables import items_table


class PostgresItemRepository(ItemRepository):
    """PostgreSQL implementation of ItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID."""
        stmt = select(items_table).where(items_table.c.id == item_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_item(dict(row)) if row else None

    async def save(self, item: Item) -> Item:
        """Save an item (create or update)."""
        item_dict = item_to_dict(item)
        stmt = pg_insert(items_table).values(**item_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[items_table.c.id],
            set_={k: v for k, v in item_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return item
