"""Shared fixtures: throwaway database, media root and auth tokens."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Iterable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.config.settings import get_settings
from app.db import models
from app.db.session import build_session_factory, init_db
from app.storage.backend import LocalStorage

ADMIN_TOKEN = "admin-secret"
VIEWER_TOKEN = "viewer-secret"

AddPost = Callable[..., Awaitable[models.Post]]


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("VIEWER_TOKEN", VIEWER_TOKEN)
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncEngine:
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'media.db'}",
        poolclass=NullPool,
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncSession:
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "media")


@pytest.fixture
def add_post(
    session_factory: async_sessionmaker[AsyncSession],
    storage: LocalStorage,
) -> AddPost:
    """Insert a post dated ``when``; attachments get a stored file per variant."""

    async def _add(
        when: str,
        *,
        post_type: str = models.ATTACHMENT_POST_TYPE,
        variants: Iterable[str] = (),
        post_parent: int | None = None,
    ) -> models.Post:
        post = models.Post(
            post_type=post_type,
            post_title=f"{post_type} {when}",
            post_date=datetime.fromisoformat(when),
            post_parent=post_parent,
        )
        if post_type == models.ATTACHMENT_POST_TYPE:
            stem = when.replace(":", "").replace(" ", "_")
            post.post_mime_type = "image/jpeg"
            post.attached_file = await storage.save(f"uploads/{stem}.jpg", b"original")
            for size_name in variants:
                path = await storage.save(f"uploads/{stem}-{size_name}.jpg", b"resized")
                post.files.append(models.AttachmentFile(size_name=size_name, storage_path=path))

        async with session_factory() as db_session:
            db_session.add(post)
            await db_session.commit()
        return post

    return _add
