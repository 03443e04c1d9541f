"""GET /api/agenda/range?from=YYYY-MM-DD&to=YYYY-MM-DD[&type=seance|commission]"""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import (
    AGENDA_CACHE,
    SOURCE_LABEL,
    cached_json,
    group_by,
    require_date_range,
    to_sitting,
)
from gateway.handlers.agenda import ITEMS_FOR_SITTINGS, last_synced_at
from gateway.request import ExtractedRequest

SITTING_TYPES = {
    "seance": "seance_type",
    "seance_type": "seance_type",
    "commission": "reunionCommission_type",
    "reunionCommission_type": "reunionCommission_type",
}


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    start, end = require_date_range(request)

    query = "SELECT * FROM sittings WHERE date >= %s AND date <= %s"
    params = [start, end]
    sitting_type = SITTING_TYPES.get(request.query("type") or "")
    if sitting_type:
        query += " AND type = %s"
        params.append(sitting_type)
    query += " ORDER BY date ASC, start_time ASC NULLS LAST"

    with database_errors("Failed to fetch sittings"):
        sittings = await db.fetch_all(query, params)
    if not sittings:
        return cached_json({"from": start, "to": end, "agendas": []}, AGENDA_CACHE)

    with database_errors("Failed to fetch agenda items"):
        items = await db.fetch_all(ITEMS_FOR_SITTINGS, ([s["id"] for s in sittings],))
    items_by_sitting = group_by(items, "sitting_id")

    agendas = []
    for day, day_sittings in sorted(group_by(sittings, "date").items()):
        with database_errors("Failed to fetch last sync time"):
            synced = await last_synced_at(db, [s["id"] for s in day_sittings])
        agendas.append(
            {
                "date": day,
                "sittings": [to_sitting(s, items_by_sitting.get(s["id"], [])) for s in day_sittings],
                "source": {"label": SOURCE_LABEL, "last_updated_at": synced},
            }
        )

    return cached_json({"from": start, "to": end, "agendas": agendas}, AGENDA_CACHE)
