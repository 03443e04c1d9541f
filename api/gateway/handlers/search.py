"""GET /api/search?q=...&type=scrutins|deputies|groups|all

Case-insensitive substring search over scrutin titles, deputy names and
political group labels.
"""

from collections import Counter

from gateway.db import Database
from gateway.errors import bad_request, database_errors, handles_api_errors
from gateway.handlers._common import SHORT_CACHE, cached_json, slugify, to_deputy, to_scrutin
from gateway.request import ExtractedRequest

LIMIT_SCRUTINS = 20
LIMIT_DEPUTIES = 20
LIMIT_GROUPS = 10

SEARCH_TYPES = ("scrutins", "deputies", "groups", "all")


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    q = request.query("q") or ""
    search_type = request.query("type") or "all"

    if len(q) < 2:
        raise bad_request("Query parameter 'q' is required and must be at least 2 characters")
    if search_type not in SEARCH_TYPES:
        raise bad_request("Parameter 'type' must be one of: scrutins, deputies, groups, all")

    pattern = f"%{q}%"
    result = {"q": q, "scrutins": [], "deputies": [], "groups": []}

    with database_errors("Search failed"):
        if search_type in ("scrutins", "all"):
            rows = await db.fetch_all(
                "SELECT * FROM scrutins WHERE titre ILIKE %s ORDER BY date_scrutin DESC LIMIT %s",
                (pattern, LIMIT_SCRUTINS),
            )
            result["scrutins"] = [to_scrutin(r) for r in rows]

        if search_type in ("deputies", "all"):
            rows = await db.fetch_all(
                "SELECT * FROM deputies WHERE civil_nom ILIKE %s OR civil_prenom ILIKE %s LIMIT %s",
                (pattern, pattern, LIMIT_DEPUTIES),
            )
            result["deputies"] = [to_deputy(r) for r in rows]

        if search_type in ("groups", "all"):
            rows = await db.fetch_all(
                "SELECT groupe_politique FROM deputies "
                "WHERE groupe_politique IS NOT NULL AND groupe_politique ILIKE %s",
                (pattern,),
            )
            counts = Counter(
                r["groupe_politique"].strip() for r in rows if r["groupe_politique"].strip()
            )
            result["groups"] = [
                {"slug": slugify(label), "label": label, "deputy_count": count}
                for label, count in counts.most_common(LIMIT_GROUPS)
            ]

    return cached_json(result, SHORT_CACHE)
