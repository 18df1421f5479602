"""
FastAPI dependency injection.

The Database lives on app.state and is built once per application;
sessions, repositories and services are resolved per request by
chaining `Depends`.
"""

import secrets
from typing import AsyncIterator, Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..db.database import Database
from ..repositories.user_repository import UserRepository
from ..services.user_service import UserService


# API Key security
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Get the application's database singleton."""
    return request.app.state.database


async def get_session(
    database: Database = Depends(get_database)
) -> AsyncIterator[AsyncSession]:
    """Open one session per request."""
    async with database.session() as session:
        yield session


def get_user_repository(
    session: AsyncSession = Depends(get_session)
) -> UserRepository:
    """Get user repository bound to the request session."""
    return UserRepository(session)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository)
) -> UserService:
    """Get user service with repository injected."""
    return UserService(repository=repository)


async def verify_api_key(
    api_key: Optional[str] = Security(api_key_header),
    settings: Settings = Depends(get_app_settings)
) -> Optional[str]:
    """
    Verify the API key when one is configured.

    With API_KEY unset the API is open and this returns None.
    """
    expected_key = settings.server.api_key

    if expected_key is None:
        return None

    if api_key is None or not secrets.compare_digest(api_key, expected_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key"
        )

    return api_key
