"""Persistence layer (SQLAlchemy async)."""

from warden.infrastructure.persistence.base import BaseModel, BaseMutableModel
from warden.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
