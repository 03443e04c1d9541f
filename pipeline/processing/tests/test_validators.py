"""Tests for the district collector — last-write-wins deduplication."""

from __future__ import annotations

from models.circonscription import CirconscriptionSchema

from processing.validators import DistrictCollector

POLYGON_A = {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]}
POLYGON_B = {"type": "Polygon", "coordinates": [[[2, 2], [3, 2], [3, 3], [2, 2]]]}


def _district(id_: str, label: str, geometry: dict | None = None) -> CirconscriptionSchema:
    return CirconscriptionSchema(id=id_, label=label, geometry=geometry)


class TestDistrictCollector:
    def test_unique_ids_pass_through(self):
        records = [_district("0101", "a"), _district("0102", "b")]

        result = DistrictCollector().collect(records)

        assert [d.id for d in result.districts] == ["0101", "0102"]
        assert result.stats.total_input == 2
        assert result.stats.unique_count == 2
        assert result.stats.overwritten_count == 0

    def test_last_write_wins(self):
        """Two records with the same id: exactly one kept, equal to the later one."""
        first = _district("0102", "first", POLYGON_A)
        last = _district("0102", "last", POLYGON_B)

        result = DistrictCollector().collect([first, last])

        assert len(result.districts) == 1
        assert result.by_id["0102"] == last
        assert result.stats.overwritten_count == 1

    def test_overwritten_id_keeps_first_seen_position(self):
        records = [
            _district("0101", "a1"),
            _district("0102", "b"),
            _district("0101", "a2"),
        ]

        result = DistrictCollector().collect(records)

        assert [d.id for d in result.districts] == ["0101", "0102"]
        assert result.by_id["0101"].label == "a2"

    def test_later_null_geometry_overwrites(self):
        """Overwrite replaces the whole record, geometry included."""
        records = [_district("0102", "x", POLYGON_A), _district("0102", "x", None)]

        result = DistrictCollector().collect(records)

        assert result.by_id["0102"].geometry is None

    def test_idempotent(self):
        """Collecting the same input twice yields the same districts."""
        records = [_district("0102", "a"), _district("0101", "b"), _district("0102", "c")]

        first = DistrictCollector().collect(records).districts
        second = DistrictCollector().collect(records).districts

        assert first == second

    def test_empty(self):
        result = DistrictCollector().collect([])

        assert result.districts == []
        assert result.stats.total_input == 0
