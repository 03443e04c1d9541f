"""Base classes for SQLAlchemy ORM models and Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all Agora models."""


class BaseSchema(BaseModel):
    """Pydantic base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)
