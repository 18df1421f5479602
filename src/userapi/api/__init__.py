"""
userapi REST API

FastAPI-based REST API over the User entity.
"""

from .app import create_app, run_server
from .deps import get_database, get_session, get_user_repository, get_user_service

__all__ = [
    "create_app",
    "run_server",
    "get_database",
    "get_session",
    "get_user_repository",
    "get_user_service",
]
