"""
Shared fixtures: an in-memory database per test and a ready TestClient.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from userapi.api.app import create_app
from userapi.core.config import DatabaseSettings, LogSettings, ServerSettings, Settings
from userapi.db.database import Database
from userapi.repositories.user_repository import UserRepository
from userapi.services.user_service import UserService


MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def make_settings(api_key=None, **database) -> Settings:
    """Settings isolated from the environment and any local .env file."""
    database.setdefault("type", "sqlite")
    database.setdefault("database", ":memory:")
    return Settings(
        database=DatabaseSettings(_env_file=None, url=None, **database),
        server=ServerSettings(_env_file=None, api_key=api_key, cors_origins=""),
        log=LogSettings(_env_file=None, level="WARNING", format="console", file=None),
    )


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with tables created."""
    db = Database(MEMORY_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def repository(session):
    return UserRepository(session)


@pytest.fixture
def service(repository):
    return UserService(repository)


@pytest.fixture
def settings_factory():
    """Build isolated settings with overrides."""
    return make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running."""
    app = create_app(settings=settings)
    with TestClient(app) as client:
        yield client
