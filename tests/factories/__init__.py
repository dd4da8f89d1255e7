"""Test factories for generating test data."""

from tests.factories.items import ItemFactory, list_name

__all__ = ["ItemFactory", "list_name"]
