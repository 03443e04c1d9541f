"""GET /api/groups: political groups with their count of sitting deputies."""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import CURRENT_MANDATE, REFERENCE_CACHE, cached_json, slugify
from gateway.request import ExtractedRequest

GROUP_COUNTS = f"""
    SELECT trim(groupe_politique) AS label, count(*) AS deputy_count
    FROM deputies
    WHERE groupe_politique IS NOT NULL AND trim(groupe_politique) <> '' AND {CURRENT_MANDATE}
    GROUP BY trim(groupe_politique)
    ORDER BY deputy_count DESC
"""


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    with database_errors("Failed to fetch groups"):
        rows = await db.fetch_all(GROUP_COUNTS)
    groups = [
        {"slug": slugify(r["label"]), "label": r["label"], "deputy_count": r["deputy_count"]}
        for r in rows
    ]
    return cached_json({"groups": groups}, REFERENCE_CACHE)
