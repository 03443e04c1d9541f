"""Circonscription (legislative electoral district) — SQLAlchemy model and Pydantic schema."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, BaseSchema

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
GeometryType = JSON().with_variant(JSONB(), "postgresql")


class Circonscription(Base):
    """One row per district, keyed by the canonical id.

    ``deputies.ref_circonscription`` references ``id``, so ids must never change
    between ingestion runs.
    """

    __tablename__ = "circonscriptions"

    id: Mapped[str] = mapped_column(String(8), primary_key=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    geometry: Mapped[Optional[dict[str, Any]]] = mapped_column(GeometryType, nullable=True)


class CirconscriptionSchema(BaseSchema):
    """Canonical district ready for upsert (``id`` = department code + 2-digit ordinal)."""

    id: str
    label: str
    # Stored as received; the transformer already nulls non-polygon types.
    geometry: Optional[dict[str, Any]] = None


class CirconscriptionSummarySchema(BaseSchema):
    """List entry returned by ``GET /api/circonscriptions``."""

    id: str
    label: str
    deputy_count: int = 0
