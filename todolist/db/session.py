"""Async database session management.

The store handle is never held globally by route code: every request
receives its own ``AsyncSession`` through the ``get_db`` dependency, which
tests replace with a session bound to an in-memory SQLite engine.

Transaction Patterns
--------------------

1. **get_db()** - Auto-commit dependency
   The session commits when the endpoint returns and rolls back on a
   store error. Routes that redirect commit explicitly first, so the
   follow-up request reads the write.

   Example::

       @router.post("/")
       async def add_item(
           db: Annotated[AsyncSession, Depends(get_db)],
       ) -> RedirectResponse:
           await ItemService.create(db, ItemCreate(name="Milk"))
           await db.commit()
           return RedirectResponse("/", status_code=303)

2. **get_db_no_commit()** - Read-only or manual transaction control
   Used by the readiness probe, which never writes.
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todolist.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the database engine (lazily initialized).

    PostgreSQL engines get pool sizing and a statement timeout; SQLite
    engines use the driver defaults.
    """
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.is_sqlite:
        engine_kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
        )
    engine = create_async_engine(settings.async_database_url, **engine_kwargs)

    if settings.is_sqlite:
        return engine

    # SET doesn't support parameters, but value is validated integer from settings
    @event.listens_for(engine.sync_engine, "connect")
    def set_statement_timeout(  # pyright: ignore[reportUnusedFunction]
        dbapi_connection: object, connection_record: object
    ) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
        cursor.execute(f"SET statement_timeout = {settings.database_statement_timeout}")
        cursor.close()

    return engine


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the async session factory (lazily initialized)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency that provides a database session.

    Yields an async session and handles commit/rollback automatically.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def get_db_no_commit() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency that provides a database session without auto-commit."""
    async with get_session_factory()() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
