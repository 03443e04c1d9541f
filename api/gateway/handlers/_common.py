"""Helpers shared by the route handlers."""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from typing import Any, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from gateway.errors import bad_request
from gateway.request import ExtractedRequest

SOURCE_LABEL = "Données officielles de l'Assemblée nationale"

SHORT_CACHE = 60
AGENDA_CACHE = 300
REFERENCE_CACHE = 3600
GEOMETRY_CACHE = 86400

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Deputies whose mandate has not ended.
CURRENT_MANDATE = "(date_fin_mandat IS NULL OR date_fin_mandat >= CURRENT_DATE)"


def cached_json(
    payload: Any,
    max_age: int,
    status_code: int = 200,
    media_type: Optional[str] = None,
) -> JSONResponse:
    """JSON response cacheable at the edge for *max_age* seconds."""
    response = JSONResponse(jsonable_encoder(payload), status_code=status_code)
    response.headers["Cache-Control"] = f"s-maxage={max_age}, stale-while-revalidate"
    if media_type:
        response.headers["Content-Type"] = media_type
    return response


def is_valid_date(value: str) -> bool:
    """True for a real calendar date written ``YYYY-MM-DD``."""
    if not DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def require_date(request: ExtractedRequest, name: str, label: str) -> str:
    value = request.query(name)
    if value is None:
        raise bad_request(f"{label} parameter is required")
    if not is_valid_date(value):
        raise bad_request("Invalid date format. Use YYYY-MM-DD")
    return value


def require_date_range(request: ExtractedRequest) -> tuple[str, str]:
    start = require_date(request, "from", "From date")
    end = require_date(request, "to", "To date")
    if start > end:
        raise bad_request("From date must be before or equal to to date")
    return start, end


def require_path_param(request: ExtractedRequest, name: str, message: str) -> str:
    value = (request.path_params.get(name) or "").strip()
    if not value:
        raise bad_request(message)
    return value


def slugify(text: str) -> str:
    """``"Rassemblement National"`` -> ``"rassemblement-national"``, accents dropped."""
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    ascii_text = "".join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")


def full_name(row: Mapping[str, Any]) -> str:
    return f"{row.get('civil_prenom') or ''} {row.get('civil_nom') or ''}".strip()


def to_deputy(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "acteur_ref": row["acteur_ref"],
        "civil_nom": row.get("civil_nom"),
        "civil_prenom": row.get("civil_prenom"),
        "date_naissance": row.get("date_naissance"),
        "lieu_naissance": row.get("lieu_naissance"),
        "profession": row.get("profession"),
        "sexe": row.get("sexe"),
        "parti_politique": row.get("parti_politique"),
        "groupe_politique": row.get("groupe_politique"),
        "circonscription": row.get("circonscription"),
        "circonscription_ref": row.get("ref_circonscription"),
        "departement": row.get("departement"),
        "date_debut_mandat": row.get("date_debut_mandat"),
        "date_fin_mandat": row.get("date_fin_mandat"),
        "legislature": row.get("legislature"),
        "official_url": row.get("official_url"),
    }


def to_scrutin(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": row["id"],
        "official_id": row.get("official_id"),
        "sitting_id": row.get("sitting_id"),
        "date_scrutin": row.get("date_scrutin"),
        "numero": row.get("numero"),
        "type_vote_code": row.get("type_vote_code"),
        "type_vote_libelle": row.get("type_vote_libelle"),
        "sort_code": row.get("sort_code"),
        "sort_libelle": row.get("sort_libelle"),
        "titre": row.get("titre"),
        "synthese_pour": row.get("synthese_pour"),
        "synthese_contre": row.get("synthese_contre"),
        "synthese_abstentions": row.get("synthese_abstentions"),
        "synthese_non_votants": row.get("synthese_non_votants"),
        "official_url": row.get("official_url"),
    }


def _hhmm(value: Any) -> str:
    return str(value)[:5]


def time_range(sitting: Mapping[str, Any]) -> Optional[str]:
    start, end = sitting.get("start_time"), sitting.get("end_time")
    if start and end:
        return f"{_hhmm(start)} - {_hhmm(end)}"
    if start:
        return _hhmm(start)
    return None


def to_agenda_item(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": row["id"],
        "sitting_id": row["sitting_id"],
        "scheduled_time": row.get("scheduled_time"),
        "title": row.get("title"),
        "description": row.get("description"),
        "category": row.get("category"),
        "reference_code": row.get("reference_code"),
        "official_url": row.get("official_url"),
    }


def to_sitting(row: Mapping[str, Any], items: list[Mapping[str, Any]]) -> dict[str, Any]:
    return {
        "id": row["id"],
        "official_id": row.get("official_id"),
        "date": row.get("date"),
        "start_time": row.get("start_time"),
        "end_time": row.get("end_time"),
        "type": row.get("type"),
        "title": row.get("title"),
        "description": row.get("description"),
        "location": row.get("location"),
        "organe_ref": row.get("organe_ref"),
        "time_range": time_range(row),
        "agenda_items": [to_agenda_item(item) for item in items],
    }


def group_by(rows: list[Mapping[str, Any]], key: str) -> dict[Any, list[Mapping[str, Any]]]:
    grouped: dict[Any, list[Mapping[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row[key], []).append(row)
    return grouped
