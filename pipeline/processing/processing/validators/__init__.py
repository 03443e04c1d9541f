"""Validators — deduplication of transformed records before loading."""

from processing.validators.district_collector import (
    CollectionResult,
    CollectionStats,
    DistrictCollector,
)

__all__ = [
    "CollectionResult",
    "CollectionStats",
    "DistrictCollector",
]
