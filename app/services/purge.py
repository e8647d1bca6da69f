"""Bulk deletion of attachments uploaded before a cutoff date."""

from __future__ import annotations

import logging
from datetime import date

from app.metrics.prometheus_exporter import (
    attachment_delete_failures_total,
    attachments_deleted_total,
)
from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)


async def delete_attachments_before(
    store: ContentStore,
    cutoff: date,
    *,
    actor_can_delete: bool,
) -> int:
    """
    Delete every attachment created strictly before ``cutoff``.

    Without permission this is a no-op returning 0 and the store is never
    queried, so callers cannot tell "no permission" from "nothing matched".
    Deletions run one after another; a failed one is logged and skipped.
    The returned count only includes deletions the store confirmed.
    """

    if not actor_can_delete:
        logger.info("Attachment purge before %s skipped: actor lacks permission.", cutoff)
        return 0

    try:
        candidates = await store.find_attachments_before(cutoff)
    except Exception:  # noqa: BLE001
        logger.exception("Attachment purge before %s aborted: lookup failed.", cutoff)
        return 0

    logger.info("Purging %d attachments uploaded before %s.", len(candidates), cutoff)

    deleted = 0
    for attachment_id in candidates:
        try:
            confirmed = await store.delete_attachment(int(attachment_id))
        except Exception:  # noqa: BLE001
            logger.exception("Deleting attachment %s raised.", attachment_id)
            confirmed = False

        if confirmed:
            deleted += 1
            attachments_deleted_total.inc()
        else:
            logger.warning("Attachment %s was not deleted.", attachment_id)
            attachment_delete_failures_total.inc()

    logger.info("Deleted %d of %d attachments before %s.", deleted, len(candidates), cutoff)
    return deleted
