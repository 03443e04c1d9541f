"""GET /api/circonscriptions/:id: one district (e.g. ``7505``) with its deputies."""

from models.circonscription import CirconscriptionSchema

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors, not_found
from gateway.handlers._common import (
    CURRENT_MANDATE,
    REFERENCE_CACHE,
    cached_json,
    require_path_param,
    to_deputy,
)
from gateway.request import ExtractedRequest


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    circo_id = require_path_param(request, "id", "id is required")

    with database_errors("Failed to fetch circonscription"):
        circo = await db.fetch_one(
            "SELECT id, label, geometry FROM circonscriptions WHERE id = %s", (circo_id,)
        )
    with database_errors("Failed to fetch deputies"):
        deputies = await db.fetch_all(
            f"SELECT *, {CURRENT_MANDATE} AS is_sitting FROM deputies "
            "WHERE trim(ref_circonscription) = %s ORDER BY civil_nom ASC",
            (circo_id,),
        )
    if circo is None and not deputies:
        raise not_found("Circonscription not found")

    if circo is not None:
        label = CirconscriptionSchema.model_validate(circo).label
    else:
        label = deputies[0].get("circonscription") or circo_id

    return cached_json(
        {
            "id": circo_id,
            "label": label,
            "deputy_count": sum(1 for d in deputies if d["is_sitting"]),
            "deputies": [to_deputy(d) for d in deputies],
        },
        REFERENCE_CACHE,
    )
