"""Transformers — convert raw source records into domain Pydantic schemas."""

from processing.transformers.base import (
    BaseTransformer,
    TransformError,
    TransformResult,
)
from processing.transformers.circonscriptions import (
    CanonicalCode,
    CirconscriptionsTransformer,
    build_label,
    canonicalize_circonscription,
)

__all__ = [
    # Base
    "BaseTransformer",
    "TransformResult",
    "TransformError",
    # Circonscriptions
    "CanonicalCode",
    "CirconscriptionsTransformer",
    "build_label",
    "canonicalize_circonscription",
]
