"""GET /api/sittings/:id: one sitting with its agenda, scrutins and attendance."""

from datetime import datetime, timezone

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors, not_found
from gateway.handlers._common import (
    AGENDA_CACHE,
    cached_json,
    full_name,
    require_path_param,
    to_scrutin,
    to_sitting,
)
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    sitting_id = require_path_param(request, "id", "Sitting ID is required")

    with database_errors("Failed to fetch sitting"):
        sitting = await db.fetch_one("SELECT * FROM sittings WHERE id::text = %s", (sitting_id,))
    if sitting is None:
        raise not_found("Sitting not found")

    with database_errors("Failed to fetch agenda items"):
        items = await db.fetch_all(
            "SELECT * FROM agenda_items WHERE sitting_id = %s ORDER BY scheduled_time ASC NULLS LAST",
            (sitting["id"],),
        )
        metadata = await db.fetch_one(
            "SELECT * FROM source_metadata WHERE sitting_id = %s", (sitting["id"],)
        )
        scrutins = await db.fetch_all(
            "SELECT * FROM scrutins WHERE sitting_id = %s ORDER BY numero ASC", (sitting["id"],)
        )
        attendance = await db.fetch_all(
            "SELECT a.acteur_ref, a.presence, d.civil_nom, d.civil_prenom "
            "FROM sitting_attendance a LEFT JOIN deputies d ON d.acteur_ref = a.acteur_ref "
            "WHERE a.sitting_id = %s ORDER BY a.acteur_ref ASC",
            (sitting["id"],),
        )

    body = to_sitting(sitting, items)
    body["source_metadata"] = {
        "id": metadata["id"] if metadata else "",
        "sitting_id": sitting["id"],
        "original_source_url": metadata.get("original_source_url", "") if metadata else "",
        "last_synced_at": metadata["last_synced_at"] if metadata else datetime.now(timezone.utc),
        "checksum": metadata.get("checksum", "") if metadata else "",
    }
    body["scrutins"] = [to_scrutin(r) for r in scrutins]
    if attendance:
        body["attendance"] = [
            {
                "acteur_ref": r["acteur_ref"],
                "presence": r["presence"],
                "acteur_nom": full_name(r) or None,
            }
            for r in attendance
        ]
    return cached_json(body, AGENDA_CACHE)
