"""Per-record transformation loop shared by source transformers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

RawT = TypeVar("RawT")
OutT = TypeVar("OutT")


@dataclass
class TransformError:
    """A raw record whose output failed schema validation."""

    record: dict
    error: str
    source: str


@dataclass
class TransformResult(Generic[OutT]):
    """Output of one transformer run.

    ``records`` keeps source order. ``skipped`` counts records that carried
    nothing to load; they are expected and never logged one by one.
    """

    records: list[OutT] = field(default_factory=list)
    skipped: int = 0
    errors: list[TransformError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class BaseTransformer(ABC, Generic[RawT, OutT]):
    """Drives :meth:`transform_record` over a batch.

    A ``None`` return skips the record. A ``ValidationError`` records a
    :class:`TransformError` and the batch carries on.
    """

    source_name: str

    def transform(self, raw_records: Iterable[RawT]) -> TransformResult[OutT]:
        result: TransformResult[OutT] = TransformResult()

        for raw in raw_records:
            try:
                record = self.transform_record(raw)
            except ValidationError as exc:
                logger.warning("%s: invalid record: %s", self.source_name, exc)
                result.errors.append(TransformError(_as_dict(raw), str(exc), self.source_name))
                continue
            if record is None:
                result.skipped += 1
            else:
                result.records.append(record)

        logger.info(
            "%s: %d records, %d skipped, %d errors",
            self.source_name,
            len(result),
            result.skipped,
            len(result.errors),
        )
        return result

    @abstractmethod
    def transform_record(self, raw: RawT) -> Optional[OutT]:
        """Return the domain object for *raw*, or ``None`` when it has nothing to load."""


def _as_dict(raw: Any) -> dict:
    if isinstance(raw, BaseModel):
        return raw.model_dump(by_alias=True)
    if isinstance(raw, dict):
        return raw
    return {"value": repr(raw)}
