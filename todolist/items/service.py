"""Persistence operations for the flat "Today" collection."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.items.defaults import default_items
from todolist.items.models import Item
from todolist.items.schemas import ItemCreate

logger = logging.getLogger(__name__)


class ItemService:
    """Service class for operations on the items collection."""

    @staticmethod
    async def create(db: AsyncSession, data: ItemCreate) -> Item:
        """Insert a new item.

        Args:
            db: The database session.
            data: The item creation data.

        Returns:
            The created item.
        """
        item = Item(**data.model_dump())
        db.add(item)
        await db.flush()
        await db.refresh(item)
        logger.info("Created item", extra={"item_id": item.id})
        return item

    @staticmethod
    async def get_all(db: AsyncSession) -> list[Item]:
        """Get every item in creation order.

        Args:
            db: The database session.

        Returns:
            All items of the collection.
        """
        result = await db.execute(select(Item).order_by(Item.created_at, Item.id))
        return list(result.scalars().all())

    @staticmethod
    async def count(db: AsyncSession) -> int:
        """Count the items in the collection."""
        result = await db.execute(select(func.count(Item.id)))
        return result.scalar() or 0

    @staticmethod
    async def insert_defaults(db: AsyncSession) -> list[Item]:
        """Insert the default items.

        Not guarded against a concurrent seed: two requests that both saw an
        empty collection each insert a full set.

        Args:
            db: The database session.

        Returns:
            The inserted items.
        """
        # Strictly increasing timestamps keep the defaults in their listed order
        now = datetime.now(UTC)
        items = [
            Item(**data.model_dump(), created_at=now + timedelta(microseconds=offset))
            for offset, data in enumerate(default_items())
        ]
        db.add_all(items)
        await db.flush()
        logger.info("Default items inserted", extra={"count": len(items)})
        return items

    @staticmethod
    async def delete(db: AsyncSession, item_id: str) -> bool:
        """Delete an item.

        Args:
            db: The database session.
            item_id: The item ID.

        Returns:
            True if the item was deleted, False if not found.
        """
        result = await db.execute(
            delete(Item)
            .where(Item.id == item_id)
            .execution_options(synchronize_session="fetch")
        )
        rowcount: int = result.rowcount  # type: ignore[attr-defined]
        if rowcount > 0:
            logger.info("Deleted item", extra={"item_id": item_id})
        return rowcount > 0
