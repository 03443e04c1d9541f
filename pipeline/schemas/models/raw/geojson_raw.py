"""Raw Pydantic models for the data.gouv.fr circonscriptions GeoJSON document."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "CirconscriptionPropertiesRaw",
    "GeoJSONFeatureRaw",
    "GeoJSONFeatureCollectionRaw",
]


class CirconscriptionPropertiesRaw(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code_departement: Optional[str] = Field(default=None, alias="codeDepartement")
    nom_departement: Optional[str] = Field(default=None, alias="nomDepartement")
    code_circonscription: Optional[str] = Field(default=None, alias="codeCirconscription")
    nom_circonscription: Optional[str] = Field(default=None, alias="nomCirconscription")


class GeoJSONFeatureRaw(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "Feature"
    properties: Optional[CirconscriptionPropertiesRaw] = None
    # Kept untyped: non-polygon geometries are nulled by the transformer, not rejected here.
    geometry: Optional[dict[str, Any]] = None


class GeoJSONFeatureCollectionRaw(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "FeatureCollection"
    features: list[GeoJSONFeatureRaw] = []

    @field_validator("features", mode="before")
    @classmethod
    def _null_features(cls, value: Any) -> Any:
        return [] if value is None else value
