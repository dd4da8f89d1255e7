"""Pydantic schemas for items."""

from pydantic import BaseModel, ConfigDict


class ItemCreate(BaseModel):
    """Schema for creating a new item in any list."""

    name: str = ""


class ItemResponse(BaseModel):
    """Schema for an item as rendered in a list view."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
