"""SQLAlchemy declarative base and common model utilities."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _utc_now() -> datetime:
    """Return current UTC datetime for use as default value."""
    return datetime.now(UTC)


def new_id() -> str:
    """Return a fresh string identifier for a row."""
    return str(uuid4())


class IdMixin:
    """Mixin that adds a string UUID primary key.

    Stored as a plain string column so ids round-trip unchanged through
    HTML forms on every backend.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )


class CreatedAtMixin:
    """Mixin that adds a created_at timestamp used for display ordering.

    The Python-side default keeps sub-second precision; server_default
    covers rows inserted outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        default=_utc_now,
        nullable=False,
    )
