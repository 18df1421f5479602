"""
userapi Domain Models

ORM-mapped entities persisted in the relational database.
"""

from .user import User

__all__ = [
    "User",
]
