"""GET /api/ingestion-status: freshness of the agenda data."""

from datetime import datetime, timedelta, timezone

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import SHORT_CACHE, cached_json
from gateway.request import ExtractedRequest

FRESHNESS_WINDOW = timedelta(hours=36)


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    with database_errors("Failed to fetch latest sitting"):
        sitting = await db.fetch_one("SELECT date FROM sittings ORDER BY date DESC LIMIT 1")
    with database_errors("Failed to fetch last sync time"):
        sync = await db.fetch_one(
            "SELECT last_synced_at FROM source_metadata ORDER BY last_synced_at DESC LIMIT 1"
        )

    now = datetime.now(timezone.utc)
    last_synced_at = sync["last_synced_at"] if sync else None
    is_fresh = False
    if isinstance(last_synced_at, datetime):
        if last_synced_at.tzinfo is None:
            last_synced_at = last_synced_at.replace(tzinfo=timezone.utc)
        is_fresh = now - last_synced_at < FRESHNESS_WINDOW

    return cached_json(
        {
            "ok": True,
            "agenda": {
                "latest_sitting_date": sitting["date"] if sitting else None,
                "last_synced_at": last_synced_at,
                "is_fresh": is_fresh,
            },
            "checked_at": now,
        },
        SHORT_CACHE,
    )
