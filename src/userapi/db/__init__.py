"""
userapi Database Layer

SQLAlchemy async engine, sessions and the declarative base.
"""

from .base import Base
from .database import Database
from .types import UTCDateTime

__all__ = [
    "Base",
    "Database",
    "UTCDateTime",
]
