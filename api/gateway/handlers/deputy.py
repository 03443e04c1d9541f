"""GET /api/deputy/:acteurRef"""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors, not_found
from gateway.handlers._common import REFERENCE_CACHE, cached_json, require_path_param, to_deputy
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    acteur_ref = require_path_param(request, "acteurRef", "acteurRef is required")

    with database_errors("Failed to fetch deputy"):
        row = await db.fetch_one("SELECT * FROM deputies WHERE acteur_ref = %s", (acteur_ref,))
    if row is None:
        raise not_found("Deputy not found")
    return cached_json(to_deputy(row), REFERENCE_CACHE)
