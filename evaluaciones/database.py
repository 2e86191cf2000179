"""Database connection and session management."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from evaluaciones.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def make_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured store.

    SQLite files get a NullPool: the engine serialises writes itself and
    pooled aiosqlite connections must not outlive their event loop.
    """
    kwargs = {"echo": settings.log_level == "DEBUG"}
    if settings.database_url.startswith("sqlite"):
        kwargs["poolclass"] = pool.NullPool
    return create_async_engine(settings.database_url, **kwargs)


def make_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables (single-file deployments without alembic)."""
    from evaluaciones import models  # noqa: F401  registers tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with request.app.state.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
