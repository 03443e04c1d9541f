"""Agora schemas — SQLAlchemy ORM models and Pydantic validation schemas."""

from models.base import Base, BaseSchema
from models.circonscription import (
    Circonscription,
    CirconscriptionSchema,
    CirconscriptionSummarySchema,
)

__all__ = [
    "Base",
    "BaseSchema",
    "Circonscription",
    "CirconscriptionSchema",
    "CirconscriptionSummarySchema",
]
