"""GET /api/departements: départements with their count of sitting deputies."""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import CURRENT_MANDATE, REFERENCE_CACHE, cached_json
from gateway.request import ExtractedRequest

DEPARTEMENT_COUNTS = f"""
    SELECT trim(departement) AS name,
           count(*) FILTER (WHERE {CURRENT_MANDATE}) AS deputy_count
    FROM deputies
    WHERE departement IS NOT NULL AND trim(departement) <> ''
    GROUP BY trim(departement)
    ORDER BY trim(departement)
"""


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    with database_errors("Failed to fetch departements"):
        rows = await db.fetch_all(DEPARTEMENT_COUNTS)
    departements = [{"name": r["name"], "deputy_count": r["deputy_count"]} for r in rows]
    return cached_json({"departements": departements}, REFERENCE_CACHE)
