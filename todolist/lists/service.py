"""Persistence operations for named lists."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from todolist.core.exceptions import ListNotFoundError
from todolist.items.defaults import default_items
from todolist.items.schemas import ItemCreate
from todolist.lists.models import ListItem, TodoList

logger = logging.getLogger(__name__)

# Title of the list backed by the flat items collection
TODAY_LIST_NAME = "Today"


def normalize_list_name(name: str) -> str:
    """Capitalize a list name: first character upper, the rest lower.

    Makes list addressing case-insensitive ("groceries", "GROCERIES" and
    "Groceries" all name the same list).
    """
    return name.capitalize()


class ListService:
    """Service class for named list operations."""

    @staticmethod
    async def get_by_name(db: AsyncSession, name: str) -> TodoList | None:
        """Get a list and its items by exact name.

        Reloads the item collection even when the list is already in the
        session, so items removed by a bulk DELETE are not served stale.

        Args:
            db: The database session.
            name: The capitalized list name.

        Returns:
            The list if found, None otherwise.
        """
        result = await db.execute(
            select(TodoList)
            .where(TodoList.name == name)
            .options(selectinload(TodoList.items))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_all(db: AsyncSession) -> list[tuple[TodoList, int]]:
        """Get every list with its item count, ordered by name."""
        result = await db.execute(
            select(TodoList, func.count(ListItem.id))
            .outerjoin(ListItem, ListItem.list_id == TodoList.id)
            .group_by(TodoList.id)
            .order_by(TodoList.name)
        )
        return [(todo_list, count) for todo_list, count in result.all()]

    @staticmethod
    async def create_with_defaults(db: AsyncSession, name: str) -> TodoList:
        """Create a list seeded with fresh copies of the default items.

        Args:
            db: The database session.
            name: The capitalized list name.

        Returns:
            The created list.
        """
        todo_list = TodoList(
            name=name,
            items=[
                ListItem(name=data.name, position=position)
                for position, data in enumerate(default_items())
            ],
        )
        db.add(todo_list)
        await db.flush()
        logger.info(
            "Created list",
            extra={"list_id": todo_list.id, "list_name": name},
        )
        return todo_list

    @staticmethod
    async def add_item(db: AsyncSession, name: str, data: ItemCreate) -> ListItem:
        """Append an item to the end of a list.

        Args:
            db: The database session.
            name: The list name.
            data: The item creation data.

        Returns:
            The appended item.

        Raises:
            ListNotFoundError: If no list has this name.
        """
        todo_list = await ListService.get_by_name(db, name)
        if todo_list is None:
            logger.warning("Add to missing list rejected", extra={"list_name": name})
            raise ListNotFoundError(name)

        position = max((item.position for item in todo_list.items), default=-1) + 1
        item = ListItem(name=data.name, position=position)
        todo_list.items.append(item)
        await db.flush()
        logger.info(
            "Added item to list",
            extra={"item_id": item.id, "list_name": name},
        )
        return item

    @staticmethod
    async def remove_item(db: AsyncSession, name: str, item_id: str) -> bool:
        """Pull an item out of a list with a single DELETE statement.

        Args:
            db: The database session.
            name: The list name.
            item_id: The ID of the item to remove.

        Returns:
            True if the item was removed, False if the list or item is missing.
        """
        list_ids = select(TodoList.id).where(TodoList.name == name)
        result = await db.execute(
            delete(ListItem)
            .where(ListItem.id == item_id, ListItem.list_id.in_(list_ids))
            .execution_options(synchronize_session="fetch")
        )
        rowcount: int = result.rowcount  # type: ignore[attr-defined]
        if rowcount > 0:
            logger.info(
                "Removed item from list",
                extra={"item_id": item_id, "list_name": name},
            )
        return rowcount > 0
