"""Items module - the flat "Today" collection."""

from todolist.items.models import Item
from todolist.items.service import ItemService

__all__ = ["Item", "ItemService"]
