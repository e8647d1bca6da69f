"""Delete attachments uploaded before a date from the command line."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

from app.admin.purge_form import PurgeOutcome, PurgeStatus, submit_purge
from app.api.auth import resolve_actor
from app.config.settings import get_settings
from app.db.session import AsyncSessionFactory, init_db
from app.monitoring.logging import configure_logging
from app.services.content_store import SqlContentStore
from app.storage.backend import LocalStorage

EXIT_CODES = {
    PurgeStatus.OK: 0,
    PurgeStatus.INVALID_DATE: 2,
    PurgeStatus.FORBIDDEN: 3,
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("date", help="Cutoff date in YYYY-MM-DD format.")
    parser.add_argument(
        "--token",
        default=os.getenv("PURGE_TOKEN", ""),
        help="Internal token of the acting user (defaults to $PURGE_TOKEN).",
    )
    return parser.parse_args(argv)


async def run(raw_date: str, token: str) -> PurgeOutcome:
    actor = resolve_actor(token)
    if actor is None:
        raise SystemExit("Invalid administrative token.")

    await init_db()
    storage = LocalStorage(Path(get_settings().media_root))
    async with AsyncSessionFactory() as session:
        return await submit_purge(raw_date, actor, SqlContentStore(session, storage))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    outcome = asyncio.run(run(args.date, args.token))
    print(outcome.message)
    return EXIT_CODES[outcome.status]


if __name__ == "__main__":
    sys.exit(main())
