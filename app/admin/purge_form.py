"""Form handling for the "delete attachments before date" admin action."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from app.api.auth import Actor, Capability
from app.services.content_store import ContentStore
from app.services.purge import delete_attachments_before

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

PERMISSION_DENIED_MESSAGE = "You do not have permission to delete attachments."
INVALID_DATE_MESSAGE = "Please enter a valid date in YYYY-MM-DD format."


class InvalidCutoffDate(ValueError):
    """Submitted cutoff is not a YYYY-MM-DD calendar date."""


class PurgeStatus(str, Enum):
    OK = "ok"
    INVALID_DATE = "invalid_date"
    FORBIDDEN = "forbidden"


@dataclass(slots=True)
class PurgeOutcome:
    """Result of a form submission, ready to be shown to the user."""

    status: PurgeStatus
    message: str
    deleted: int = 0
    cutoff: date | None = None


def parse_cutoff_date(raw: str) -> date:
    """
    Parse a submitted ``YYYY-MM-DD`` value, rejecting anything else.

    Beyond the pattern, the value must be a real calendar date, so
    ``2024-02-30`` and ``2024-13-01`` are rejected even though they match.
    """

    value = raw.strip()
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidCutoffDate(value)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidCutoffDate(value) from exc


def format_result_message(deleted: int, cutoff: date) -> str:
    return f"Deleted {deleted} attachments uploaded before {cutoff.isoformat()}."


async def submit_purge(raw_date: str, actor: Actor, store: ContentStore) -> PurgeOutcome:
    """Check permission, then the date, then run the purge."""

    can_delete = actor.can(Capability.DELETE_ATTACHMENTS)
    if not can_delete:
        return PurgeOutcome(status=PurgeStatus.FORBIDDEN, message=PERMISSION_DENIED_MESSAGE)

    try:
        cutoff = parse_cutoff_date(raw_date)
    except InvalidCutoffDate:
        return PurgeOutcome(status=PurgeStatus.INVALID_DATE, message=INVALID_DATE_MESSAGE)

    deleted = await delete_attachments_before(store, cutoff, actor_can_delete=can_delete)
    return PurgeOutcome(
        status=PurgeStatus.OK,
        message=format_result_message(deleted, cutoff),
        deleted=deleted,
        cutoff=cutoff,
    )
