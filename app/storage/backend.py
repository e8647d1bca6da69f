"""Storage backends for attachment payloads."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    """Minimal file storage contract used by the content store."""

    async def save(self, key: str, data: bytes) -> str: ...

    async def delete(self, path: str) -> bool: ...

    async def exists(self, path: str) -> bool: ...


class LocalStorage:
    """
    Keeps payloads on the local filesystem below a media root.

    Purging only calls ``delete``; ``save`` and ``exists`` serve seeding and
    verification.
    """

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        resolved = candidate.resolve()
        if not resolved.is_relative_to(self._root):
            raise ValueError(f"Path {path!r} is outside of the media root.")
        return resolved

    async def save(self, key: str, data: bytes) -> str:
        """Write ``data`` under ``key`` and return the stored relative path."""

        target = self._resolve(key)
        await asyncio.to_thread(self._write_file, target, data)
        return target.relative_to(self._root).as_posix()

    async def delete(self, path: str) -> bool:
        """
        Remove a stored file.

        A file that is already gone counts as removed. Paths outside the media
        root raise ``ValueError``; other filesystem errors yield ``False``.
        """

        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.unlink, missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", target, exc)
            return False
        return True

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._resolve(path).is_file)

    @staticmethod
    def _write_file(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
