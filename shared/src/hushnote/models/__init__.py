"""SQLAlchemy ORM models for Hushnote."""

from hushnote.models.base import Base
from hushnote.models.capability_setting import CapabilitySetting

__all__ = [
    "Base",
    "CapabilitySetting",
]
