"""Circonscriptions transformer — raw GeoJSON features to canonical districts.

The canonical id is the department code followed by the 2-digit ordinal
(``"01"`` + ``2`` -> ``"0102"``). ``deputies.ref_circonscription`` points at it,
so the same source feature must always produce the same id.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from models.circonscription import CirconscriptionSchema
from models.raw.geojson_raw import GeoJSONFeatureRaw

from processing.transformers.base import BaseTransformer

# Overseas departments 971-976 encode the ordinal after a 3-digit prefix.
_OVERSEAS_PREFIX = re.compile(r"^97[1-6]")
_LEADING_DIGITS = re.compile(r"\d+")

POLYGON_TYPES = frozenset({"Polygon", "MultiPolygon"})


class CanonicalCode(NamedTuple):
    id: str
    ordinal: int


def _parse_ordinal(digits: str) -> Optional[int]:
    match = _LEADING_DIGITS.match(digits)
    if match is None:
        return None
    return int(match.group())


def canonicalize_circonscription(
    code_circonscription: Optional[str],
    code_departement: Optional[str],
) -> Optional[CanonicalCode]:
    """Turn a (codeCirconscription, codeDepartement) pair into a canonical id.

    Returns ``None`` when either code is blank or the ordinal is not a
    positive integer.

    >>> canonicalize_circonscription("0102", "01")
    CanonicalCode(id='0102', ordinal=2)
    >>> canonicalize_circonscription("9711", "971")
    CanonicalCode(id='97101', ordinal=1)
    """
    code = (code_circonscription or "").strip()
    dept = (code_departement or "").strip()
    if not code or not dept:
        return None

    if _OVERSEAS_PREFIX.match(code):
        digits = code[-1:] if len(code) == 4 else code[-2:]
    else:
        digits = code[-2:]

    ordinal = _parse_ordinal(digits)
    if ordinal is None or ordinal < 1:
        return None
    return CanonicalCode(id=f"{dept}{ordinal:02d}", ordinal=ordinal)


def build_label(nom_departement: str, ordinal: int) -> str:
    """Display label, e.g. ``("Ain", 4)`` -> ``"Ain - 4e circonscription"``."""
    ordinal_text = "1ère" if ordinal == 1 else f"{ordinal}e"
    return f"{nom_departement} - {ordinal_text} circonscription"


def polygon_geometry(geometry: Optional[dict]) -> Optional[dict]:
    """Keep Polygon/MultiPolygon geometries, drop anything else to ``None``."""
    if geometry and geometry.get("type") in POLYGON_TYPES:
        return geometry
    return None


class CirconscriptionsTransformer(BaseTransformer[GeoJSONFeatureRaw, CirconscriptionSchema]):
    """Transform data.gouv.fr GeoJSON features into ``circonscriptions`` rows.

    Output keeps source order and may still contain several rows per id; the
    :class:`~processing.validators.DistrictCollector` resolves those.
    """

    source_name: str = "circonscriptions"

    def transform_record(self, feature: GeoJSONFeatureRaw) -> Optional[CirconscriptionSchema]:
        props = feature.properties
        if props is None:
            return None

        nom_dept = (props.nom_departement or "").strip()
        if not nom_dept:
            return None

        canonical = canonicalize_circonscription(
            props.code_circonscription, props.code_departement
        )
        if canonical is None:
            return None

        return CirconscriptionSchema(
            id=canonical.id,
            label=build_label(nom_dept, canonical.ordinal),
            geometry=polygon_geometry(feature.geometry),
        )
