"""
userapi Services

Business logic between the API/CLI and the repositories.
"""

from .user_service import UserService

__all__ = [
    "UserService",
]
