"""GET /api/scrutins/:id: one scrutin (by UUID or official id) with votes and group breakdown."""

import re

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors, not_found
from gateway.handlers._common import (
    AGENDA_CACHE,
    cached_json,
    full_name,
    require_path_param,
    to_scrutin,
)
from gateway.request import ExtractedRequest

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.I)

POSITIONS = ("pour", "contre", "abstention", "non_votant")


def group_breakdown(votes):
    """Per-group vote counts and percentages, largest groups first."""
    stats = {}
    for vote in votes:
        group = (vote.get("groupe_politique") or "").strip()
        if not group:
            continue
        counts = stats.setdefault(group, dict.fromkeys(POSITIONS + ("total",), 0))
        counts["total"] += 1
        if vote["position"] in POSITIONS:
            counts[vote["position"]] += 1

    breakdown = []
    for group, counts in stats.items():
        total = counts["total"] or 1
        entry = {"groupe_politique": group, **counts}
        for position in POSITIONS:
            entry[f"{position}_pct"] = round(counts[position] * 100 / total, 2)
        breakdown.append(entry)
    breakdown.sort(key=lambda e: e["total"], reverse=True)
    return breakdown


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    scrutin_id = require_path_param(request, "id", "Scrutin ID is required")
    column = "id" if UUID_RE.match(scrutin_id) else "official_id"

    with database_errors("Failed to fetch scrutin"):
        scrutin = await db.fetch_one(
            f"SELECT * FROM scrutins WHERE {column}::text = %s", (scrutin_id,)
        )
    if scrutin is None:
        raise not_found("Scrutin not found")

    with database_errors("Failed to fetch votes"):
        votes = await db.fetch_all(
            "SELECT v.*, d.civil_nom, d.civil_prenom, d.groupe_politique "
            "FROM scrutin_votes v LEFT JOIN deputies d ON d.acteur_ref = v.acteur_ref "
            "WHERE v.scrutin_id = %s ORDER BY v.position ASC, v.acteur_ref ASC",
            (scrutin["id"],),
        )
        tags = await db.fetch_all(
            "SELECT t.id, t.slug, t.label FROM scrutin_thematic_tags st "
            "JOIN thematic_tags t ON t.id = st.tag_id WHERE st.scrutin_id = %s",
            (scrutin["id"],),
        )

    body = to_scrutin(scrutin)
    body.update(
        objet_libelle=scrutin.get("objet_libelle"),
        demandeur_texte=scrutin.get("demandeur_texte"),
        votes=[
            {
                "id": v["id"],
                "scrutin_id": v["scrutin_id"],
                "acteur_ref": v["acteur_ref"],
                "position": v["position"],
                "acteur_nom": full_name(v) or None,
            }
            for v in votes
        ],
        tags=[dict(t) for t in tags],
        group_votes=group_breakdown(votes),
    )
    return cached_json(body, AGENDA_CACHE)
