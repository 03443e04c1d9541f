"""Tests for SQLAlchemy ORM models and Pydantic schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from models.base import Base
from models.circonscription import (
    Circonscription,
    CirconscriptionSchema,
    CirconscriptionSummarySchema,
)

SQUARE = {
    "type": "Polygon",
    "coordinates": [[[5.0, 46.0], [5.1, 46.0], [5.1, 46.1], [5.0, 46.0]]],
}


@pytest.fixture
def engine():
    """In-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


class TestTableCreation:
    def test_circonscriptions_in_metadata(self):
        """The circonscriptions table is registered in metadata."""
        assert "circonscriptions" in Base.metadata.tables

    def test_primary_key_is_id(self):
        """The canonical id is the primary key (upsert conflict target)."""
        table = Base.metadata.tables["circonscriptions"]
        assert [c.name for c in table.primary_key.columns] == ["id"]

    def test_geometry_nullable(self):
        table = Base.metadata.tables["circonscriptions"]
        assert table.c.geometry.nullable is True
        assert table.c.label.nullable is False


class TestCirconscriptionModel:
    def test_insert_and_read_back(self, session):
        """A row with geometry round-trips through the ORM."""
        session.add(Circonscription(id="0102", label="Ain - 2e circonscription", geometry=SQUARE))
        session.commit()

        row = session.scalars(select(Circonscription).where(Circonscription.id == "0102")).one()
        assert row.label == "Ain - 2e circonscription"
        assert row.geometry["type"] == "Polygon"

    def test_schema_from_orm(self, session):
        """CirconscriptionSchema can be built from an ORM instance."""
        session.add(Circonscription(id="97101", label="Guadeloupe - 1ère circonscription", geometry=None))
        session.commit()

        row = session.get(Circonscription, "97101")
        schema = CirconscriptionSchema.model_validate(row)
        assert schema.id == "97101"
        assert schema.geometry is None


class TestCirconscriptionSchema:
    def test_polygon_geometry(self):
        schema = CirconscriptionSchema(id="0102", label="Ain - 2e circonscription", geometry=SQUARE)
        assert schema.geometry == SQUARE

    def test_multipolygon_geometry(self):
        geometry = {"type": "MultiPolygon", "coordinates": [SQUARE["coordinates"]]}
        schema = CirconscriptionSchema(id="0102", label="x", geometry=geometry)
        assert schema.geometry["type"] == "MultiPolygon"

    def test_geometry_members_kept(self):
        """Members beyond type and coordinates, such as bbox, are not dropped."""
        geometry = {**SQUARE, "bbox": [5.0, 46.0, 5.1, 46.1]}
        schema = CirconscriptionSchema(id="0102", label="x", geometry=geometry)
        assert schema.geometry == geometry

    def test_polygon_without_coordinates_accepted(self):
        schema = CirconscriptionSchema(id="0102", label="x", geometry={"type": "Polygon"})
        assert schema.geometry == {"type": "Polygon"}

    def test_geometry_must_be_an_object(self):
        with pytest.raises(ValidationError):
            CirconscriptionSchema(id="0102", label="x", geometry=[5.0, 46.0])

    def test_label_is_stripped(self):
        schema = CirconscriptionSchema(id="0102", label="  Ain - 2e circonscription ")
        assert schema.label == "Ain - 2e circonscription"

    def test_dump_round_trip(self):
        """model_dump produces plain JSON-compatible geometry."""
        schema = CirconscriptionSchema(id="0102", label="x", geometry=SQUARE)
        dumped = schema.model_dump(mode="json")
        assert dumped["geometry"] == SQUARE


class TestSummarySchema:
    def test_default_deputy_count(self):
        summary = CirconscriptionSummarySchema(id="7505", label="Paris - 5e circonscription")
        assert summary.deputy_count == 0
