"""GET /api/scrutins?from=YYYY-MM-DD&to=YYYY-MM-DD"""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import AGENDA_CACHE, cached_json, require_date_range, to_scrutin
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    start, end = require_date_range(request)

    with database_errors("Failed to fetch scrutins"):
        rows = await db.fetch_all(
            "SELECT * FROM scrutins WHERE date_scrutin >= %s AND date_scrutin <= %s "
            "ORDER BY date_scrutin DESC, numero DESC",
            (start, end),
        )

    return cached_json(
        {
            "from": start,
            "to": end,
            "scrutins": [to_scrutin(r) for r in rows],
            "source": {
                "label": "Assemblée nationale - Scrutins",
                "last_updated_at": rows[0].get("updated_at") if rows else None,
            },
        },
        AGENDA_CACHE,
    )
