"""Deduplication of transformed districts before loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from models.circonscription import CirconscriptionSchema

logger = logging.getLogger(__name__)


@dataclass
class CollectionStats:
    """Summary statistics from a collection pass."""

    total_input: int = 0
    unique_count: int = 0
    overwritten_count: int = 0


@dataclass
class CollectionResult:
    """Districts keyed by canonical id, in first-seen id order."""

    by_id: dict[str, CirconscriptionSchema] = field(default_factory=dict)
    stats: CollectionStats = field(default_factory=CollectionStats)

    @property
    def districts(self) -> list[CirconscriptionSchema]:
        return list(self.by_id.values())


class DistrictCollector:
    """Merges districts that share a canonical id.

    The source may split one district into several features. On collision the
    later feature replaces the earlier one (last-write-wins) while the id keeps
    the position where it was first seen, so output depends only on source order.
    """

    def collect(self, records: Iterable[CirconscriptionSchema]) -> CollectionResult:
        """Collapse *records* to one entry per ``id``.

        Args:
            records: Districts in source order.

        Returns:
            CollectionResult with the unique districts and stats.
        """
        result = CollectionResult()
        stats = result.stats

        for record in records:
            stats.total_input += 1
            if record.id in result.by_id:
                stats.overwritten_count += 1
                logger.debug("District %s seen again, keeping the later feature", record.id)
            result.by_id[record.id] = record

        stats.unique_count = len(result.by_id)

        logger.info(
            "Collection complete: %d input, %d unique, %d overwritten",
            stats.total_input,
            stats.unique_count,
            stats.overwritten_count,
        )
        return result
