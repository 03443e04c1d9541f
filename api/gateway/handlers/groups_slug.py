"""GET /api/groups/:slug: one political group with its deputies."""

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors, not_found
from gateway.handlers._common import (
    REFERENCE_CACHE,
    cached_json,
    require_path_param,
    slugify,
    to_deputy,
)
from gateway.request import ExtractedRequest

METADATA_FIELDS = (
    "date_debut",
    "date_fin",
    "position_politique",
    "orientation",
    "president_name",
    "legislature",
    "official_url",
)


async def resolve_label(db: Database, slug: str):
    """Group label for *slug*: metadata table first, then labels seen on deputies."""
    meta = await db.fetch_one("SELECT * FROM political_groups_metadata WHERE slug = %s", (slug,))
    if meta and meta.get("label"):
        return meta["label"], meta

    rows = await db.fetch_all(
        "SELECT DISTINCT trim(groupe_politique) AS label FROM deputies "
        "WHERE groupe_politique IS NOT NULL"
    )
    for row in rows:
        if row["label"] and slugify(row["label"]) == slug:
            return row["label"], None
    return None, None


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    slug = require_path_param(request, "slug", "slug is required")

    with database_errors("Failed to fetch groups"):
        label, meta = await resolve_label(db, slug)
    if label is None:
        raise not_found("Political group not found")

    with database_errors("Failed to fetch deputies"):
        rows = await db.fetch_all(
            "SELECT * FROM deputies WHERE trim(groupe_politique) = %s ORDER BY civil_nom ASC",
            (label,),
        )

    body = {
        "slug": slug,
        "label": label,
        "deputy_count": len(rows),
        "deputies": [to_deputy(r) for r in rows],
    }
    if meta:
        metadata = {field: meta.get(field) for field in METADATA_FIELDS}
        metadata["color_hex"] = meta.get("couleur_hex")
        body["metadata"] = metadata
    return cached_json(body, REFERENCE_CACHE)
