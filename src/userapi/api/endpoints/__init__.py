"""
userapi API Endpoints

REST API endpoint modules.
"""

from . import health, users

__all__ = [
    "health",
    "users",
]
