"""Lists module - named lists with embedded items."""

from todolist.lists.models import ListItem, TodoList
from todolist.lists.service import TODAY_LIST_NAME, ListService, normalize_list_name

__all__ = [
    "TODAY_LIST_NAME",
    "ListItem",
    "ListService",
    "TodoList",
    "normalize_list_name",
]
