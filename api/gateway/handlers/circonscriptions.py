"""GET /api/circonscriptions: every district with its count of sitting deputies."""

from models.circonscription import CirconscriptionSummarySchema

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import CURRENT_MANDATE, REFERENCE_CACHE, cached_json
from gateway.request import ExtractedRequest

SUMMARIES = f"""
    SELECT c.id, c.label, count(d.acteur_ref) AS deputy_count
    FROM circonscriptions c
    LEFT JOIN deputies d ON trim(d.ref_circonscription) = c.id AND {CURRENT_MANDATE}
    GROUP BY c.id, c.label
    ORDER BY c.label ASC
    LIMIT 1000
"""


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    with database_errors("Failed to fetch circonscriptions"):
        rows = await db.fetch_all(SUMMARIES)
    circonscriptions = [
        CirconscriptionSummarySchema.model_validate(r).model_dump() for r in rows
    ]
    return cached_json({"circonscriptions": circonscriptions}, REFERENCE_CACHE)
