"""
userapi API Schemas

Request and response schemas for the REST API.
These are separate from the ORM entities to control what is exposed.
"""

from .user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserListResponse,
)
from .common import ErrorResponse

__all__ = [
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserListResponse",
    # Common schemas
    "ErrorResponse",
]
