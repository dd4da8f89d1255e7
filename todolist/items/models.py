"""Item SQLAlchemy model."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from todolist.db.base import Base, CreatedAtMixin, IdMixin


class Item(IdMixin, CreatedAtMixin, Base):
    """An entry of the flat "Today" collection."""

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"
