"""Administrative routes for purging old media."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.purge_form import PurgeStatus, submit_purge
from app.api.auth import Actor, ActorDependency
from app.config.settings import get_settings
from app.db.session import get_session
from app.services.content_store import SqlContentStore
from app.storage.backend import LocalStorage, StorageBackend

router = APIRouter(prefix="/admin", tags=["admin"])


class PurgeRequest(BaseModel):
    # Malformed or missing values reach the form check, which answers with 400.
    date: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> str:
        return "" if value is None else str(value)


class PurgeResponse(BaseModel):
    deleted: int
    date: str
    message: str


def get_storage() -> StorageBackend:
    return LocalStorage(Path(get_settings().media_root))


def get_content_store(
    session: AsyncSession = Depends(get_session),
    storage: StorageBackend = Depends(get_storage),
) -> SqlContentStore:
    return SqlContentStore(session, storage)


_ERROR_STATUS = {
    PurgeStatus.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    PurgeStatus.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
}


@router.post("/attachments/purge", response_model=PurgeResponse)
async def purge_attachments(
    payload: PurgeRequest,
    actor: Actor = ActorDependency,
    store: SqlContentStore = Depends(get_content_store),
) -> PurgeResponse:
    """Permanently delete attachments uploaded before the submitted date."""

    outcome = await submit_purge(payload.date, actor, store)
    if outcome.status is not PurgeStatus.OK:
        raise HTTPException(status_code=_ERROR_STATUS[outcome.status], detail=outcome.message)

    return PurgeResponse(
        deleted=outcome.deleted,
        date=outcome.cutoff.isoformat(),
        message=outcome.message,
    )
