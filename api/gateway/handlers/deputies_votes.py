"""GET /api/deputies/:acteurRef/votes: voting record of one deputy, newest first."""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import AGENDA_CACHE, cached_json, full_name, require_path_param
from gateway.request import ExtractedRequest

VOTES = """
    SELECT v.scrutin_id, v.position, s.titre, s.date_scrutin
    FROM scrutin_votes v LEFT JOIN scrutins s ON s.id = v.scrutin_id
    WHERE v.acteur_ref = %s
    ORDER BY s.date_scrutin DESC NULLS LAST, v.scrutin_id DESC
"""


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    acteur_ref = require_path_param(request, "acteurRef", "acteurRef is required")

    with database_errors("Failed to fetch deputy votes"):
        votes = await db.fetch_all(VOTES, (acteur_ref,))
        deputy = await db.fetch_one(
            "SELECT civil_nom, civil_prenom FROM deputies WHERE acteur_ref = %s", (acteur_ref,)
        )

    return cached_json(
        {
            "acteur_ref": acteur_ref,
            "acteur_nom": full_name(deputy) if deputy else None,
            "votes": [
                {
                    "scrutin_id": v["scrutin_id"],
                    "scrutin_titre": v["titre"] or "",
                    "date_scrutin": v["date_scrutin"] or "",
                    "position": v["position"],
                }
                for v in votes
            ],
        },
        AGENDA_CACHE,
    )
