"""Seed entries for a newly observed empty list."""

from todolist.items.schemas import ItemCreate

DEFAULT_ITEM_NAMES: tuple[str, ...] = (
    "Welcome to your To-Do List!",
    "Hit the + button to add a new Item.",
    "Check off items once you're done!",
)


def default_items() -> list[ItemCreate]:
    """Build a fresh set of default entries.

    Each call returns new objects; callers turn them into new rows, so no
    two lists ever share a seed item.
    """
    return [ItemCreate(name=name) for name in DEFAULT_ITEM_NAMES]
