"""Database engine and session management."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.settings import get_settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine, making room for a SQLite file if needed."""

    if database_url.startswith("sqlite"):
        database_path = Path(make_url(database_url).database or "")
        if database_path.parent:
            database_path.parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(database_url, echo=False, future=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False, class_=AsyncSession)


engine = build_engine(get_settings().database_url)
AsyncSessionFactory = build_session_factory(engine)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a managed asynchronous SQLAlchemy session."""

    async with AsyncSessionFactory() as session:
        yield session


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create database tables if they do not exist."""

    from app.db import models  # noqa: WPS433 — import inside function to avoid cycles

    async with (bind or engine).begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
