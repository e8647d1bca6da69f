"""Access to attachment records and their stored payloads."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db import models
from app.storage.backend import StorageBackend

logger = logging.getLogger(__name__)


class ContentStoreError(RuntimeError):
    """Raised when the content store cannot answer a query."""


class ContentStore(Protocol):
    """Operations the bulk purge needs from the system of record."""

    async def find_attachments_before(self, cutoff: date) -> list[int]: ...

    async def delete_attachment(self, attachment_id: int) -> bool: ...


class SqlContentStore:
    """Content store backed by the ``posts`` tables and a storage backend."""

    def __init__(self, session: AsyncSession, storage: StorageBackend) -> None:
        self._session = session
        self._storage = storage

    async def find_attachments_before(self, cutoff: date) -> list[int]:
        """Return IDs of attachments whose ``post_date`` is before midnight of ``cutoff``."""

        boundary = datetime.combine(cutoff, time.min)
        stmt = select(models.Post.id).where(
            models.Post.post_type == models.ATTACHMENT_POST_TYPE,
            models.Post.post_date < boundary,
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("Attachment lookup before %s failed: %s", cutoff.isoformat(), exc)
            raise ContentStoreError("Could not query attachments.") from exc
        return list(result.scalars().all())

    async def delete_attachment(self, attachment_id: int) -> bool:
        """
        Permanently delete an attachment row, its variants and its files.

        Returns ``False`` when the record is missing or not an attachment,
        when the database rejects the delete, or when any stored file could
        not be removed. In the last case the row is already gone.
        """

        try:
            post = await self._session.get(
                models.Post,
                attachment_id,
                options=[selectinload(models.Post.files)],
                populate_existing=True,
            )
            if post is None or post.post_type != models.ATTACHMENT_POST_TYPE:
                logger.warning("Attachment %s not found; nothing to delete.", attachment_id)
                return False

            paths = [post.attached_file] if post.attached_file else []
            paths.extend(variant.storage_path for variant in post.files)

            await self._session.execute(
                update(models.Post)
                .where(models.Post.post_parent == attachment_id)
                .values(post_parent=None)
            )
            await self._session.delete(post)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Database delete of attachment %s failed: %s", attachment_id, exc)
            return False

        return await self._remove_files(attachment_id, list(dict.fromkeys(paths)))

    async def _remove_files(self, attachment_id: int, paths: list[str]) -> bool:
        removed = True
        for path in paths:
            try:
                ok = await self._storage.delete(path)
            except ValueError as exc:
                logger.warning("Refusing to delete file of attachment %s: %s", attachment_id, exc)
                ok = False
            removed = removed and ok
        return removed
