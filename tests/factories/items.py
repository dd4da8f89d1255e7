"""Factory for generating test item data."""

from typing import Any

from faker import Faker

from todolist.items.schemas import ItemCreate

fake = Faker()


class ItemFactory:
    """Factory for creating test item data."""

    @staticmethod
    def create_data(**overrides: Any) -> ItemCreate:
        """Create item creation data.

        Args:
            **overrides: Fields to override with specific values.

        Returns:
            ItemCreate schema with test data.
        """
        data: dict[str, Any] = {"name": fake.sentence(nb_words=3).rstrip(".")}
        data.update(overrides)
        return ItemCreate(**data)

    @staticmethod
    def create_batch_data(count: int = 3, **overrides: Any) -> list[ItemCreate]:
        """Create multiple item creation data objects."""
        return [ItemFactory.create_data(**overrides) for _ in range(count)]

    @staticmethod
    def form(list_name: str = "Today", **overrides: Any) -> dict[str, str]:
        """Create the form body posted by the add button of a list page."""
        return {"newItem": ItemFactory.create_data(**overrides).name, "list": list_name}


# Single-segment paths that are not list pages
_RESERVED_NAMES = {"Today", "About", "Delete"}


def list_name() -> str:
    """A random single-word list name in its capitalized form."""
    name = fake.unique.word().capitalize()
    while name in _RESERVED_NAMES:
        name = fake.unique.word().capitalize()
    return name
