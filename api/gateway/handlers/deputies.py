"""GET /api/deputies?departement=Paris"""

from gateway.db import Database
from gateway.errors import bad_request, database_errors, handles_api_errors
from gateway.handlers._common import REFERENCE_CACHE, cached_json, to_deputy
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    departement = request.query("departement")
    if departement is None:
        raise bad_request("Query param 'departement' is required (e.g. ?departement=Paris)")

    with database_errors("Failed to fetch deputies"):
        rows = await db.fetch_all(
            "SELECT * FROM deputies WHERE lower(trim(departement)) = lower(%s) ORDER BY civil_nom ASC",
            (departement,),
        )
    return cached_json({"deputies": [to_deputy(r) for r in rows]}, REFERENCE_CACHE)
