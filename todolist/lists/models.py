"""List SQLAlchemy models."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from todolist.db.base import Base, CreatedAtMixin, IdMixin


class TodoList(IdMixin, CreatedAtMixin, Base):
    """A named list that owns its items."""

    __tablename__ = "lists"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Capitalized list name, unique per store",
    )

    items: Mapped[list["ListItem"]] = relationship(
        back_populates="todo_list",
        cascade="all, delete-orphan",
        order_by="ListItem.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<TodoList(id={self.id}, name={self.name})>"


class ListItem(IdMixin, CreatedAtMixin, Base):
    """An item embedded in a named list."""

    __tablename__ = "list_items"

    list_id: Mapped[str] = mapped_column(
        ForeignKey("lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Order of the item within its list",
    )

    todo_list: Mapped[TodoList] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return f"<ListItem(id={self.id}, name={self.name}, list_id={self.list_id})>"
