"""GET /api/circonscriptions/geojson: map overlay of all districts with a geometry."""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers._common import GEOMETRY_CACHE, cached_json
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    with database_errors("Failed to fetch circonscriptions"):
        rows = await db.fetch_all(
            "SELECT id, label, geometry FROM circonscriptions "
            "WHERE geometry IS NOT NULL ORDER BY id ASC"
        )
    features = [
        {
            "type": "Feature",
            "properties": {"id": r["id"], "label": r["label"]},
            "geometry": r["geometry"],
        }
        for r in rows
        if isinstance(r["geometry"], dict)
    ]
    return cached_json(
        {"type": "FeatureCollection", "features": features},
        GEOMETRY_CACHE,
        media_type="application/geo+json",
    )
