"""GET /api/agenda?date=YYYY-MM-DD"""

from datetime import datetime, timezone

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import (
    AGENDA_CACHE,
    SOURCE_LABEL,
    cached_json,
    group_by,
    require_date,
    to_sitting,
)
from gateway.request import ExtractedRequest

SITTINGS_FOR_DATE = "SELECT * FROM sittings WHERE date = %s ORDER BY start_time ASC NULLS LAST"
ITEMS_FOR_SITTINGS = (
    "SELECT * FROM agenda_items WHERE sitting_id = ANY(%s) "
    "ORDER BY scheduled_time ASC NULLS LAST"
)
LAST_SYNC_FOR_SITTINGS = (
    "SELECT max(last_synced_at) AS last_synced_at FROM source_metadata WHERE sitting_id = ANY(%s)"
)
LAST_SYNC = "SELECT max(last_synced_at) AS last_synced_at FROM source_metadata"


async def last_synced_at(db: Database, sitting_ids=None):
    """Latest sync time for *sitting_ids* (all sittings when ``None``), falling back to now."""
    if sitting_ids:
        row = await db.fetch_one(LAST_SYNC_FOR_SITTINGS, (sitting_ids,))
        if row and row["last_synced_at"]:
            return row["last_synced_at"]
    row = await db.fetch_one(LAST_SYNC)
    if row and row["last_synced_at"]:
        return row["last_synced_at"]
    return datetime.now(timezone.utc)


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    day = require_date(request, "date", "Date")

    with database_errors("Failed to fetch sittings"):
        sittings = await db.fetch_all(SITTINGS_FOR_DATE, (day,))

    sitting_ids = [s["id"] for s in sittings]
    items = []
    if sitting_ids:
        with database_errors("Failed to fetch agenda items"):
            items = await db.fetch_all(ITEMS_FOR_SITTINGS, (sitting_ids,))

    with database_errors("Failed to fetch last sync time"):
        synced = await last_synced_at(db, sitting_ids)

    by_sitting = group_by(items, "sitting_id")
    return cached_json(
        {
            "date": day,
            "sittings": [to_sitting(s, by_sitting.get(s["id"], [])) for s in sittings],
            "source": {"label": SOURCE_LABEL, "last_updated_at": synced},
        },
        AGENDA_CACHE,
    )
