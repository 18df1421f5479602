"""
userapi Configuration using Pydantic Settings.

Provides strongly typed configuration loaded from environment variables
and a `.env` file, with validation and sensible defaults.

The `.env` layout follows the conventional scaffold:
- DB_TYPE, DB_HOST, DB_PORT, DB_USERNAME, DB_PASSWORD, DB_DATABASE (database)
- PORT, HOST, CORS_ORIGINS, API_KEY (server)
- LOG_LEVEL, LOG_FORMAT, LOG_FILE (logging)

Environment variables take precedence over the `.env` file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError


DEFAULT_ENV_FILE = ".env"


class DatabaseType(str, Enum):
    """Supported relational database backends."""
    SQLITE = "sqlite"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"


# Async SQLAlchemy drivers per backend
DRIVERS = {
    DatabaseType.SQLITE: "sqlite+aiosqlite",
    DatabaseType.POSTGRES: "postgresql+asyncpg",
    DatabaseType.MYSQL: "mysql+aiomysql",
    DatabaseType.MARIADB: "mysql+aiomysql",
}

DEFAULT_PORTS = {
    DatabaseType.POSTGRES: 5432,
    DatabaseType.MYSQL: 3306,
    DatabaseType.MARIADB: 3306,
}

_TYPE_ALIASES = {
    "postgresql": DatabaseType.POSTGRES,
    "pg": DatabaseType.POSTGRES,
    "sqlite3": DatabaseType.SQLITE,
}


def is_memory_url(url: Union[str, URL]) -> bool:
    """Whether a URL points at an in-memory sqlite database."""
    url = make_url(url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class DatabaseSettings(BaseSettings):
    """Database connection settings (DB_* variables)."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=DEFAULT_ENV_FILE,
        extra="ignore",
    )

    type: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        description="Database backend (sqlite, postgres, mysql, mariadb)"
    )
    host: Optional[str] = Field(
        default="localhost",
        description="Database server host"
    )
    port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Database server port (None = backend default)"
    )
    username: Optional[str] = Field(
        default=None,
        description="Database user"
    )
    password: Optional[str] = Field(
        default=None,
        description="Database password"
    )
    database: str = Field(
        default="app.db",
        description="Database name (or file path for sqlite, ':memory:' for in-memory)"
    )
    url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL, overrides the individual fields"
    )
    synchronize: bool = Field(
        default=True,
        description="Create missing tables on startup"
    )
    echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )

    @field_validator('type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        """Accept case-insensitive names and common aliases."""
        if isinstance(v, str):
            v = v.strip().lower()
            return _TYPE_ALIASES.get(v, v)
        return v

    @field_validator('host', 'port', 'username', 'password', 'url', mode='before')
    @classmethod
    def empty_as_none(cls, v):
        """Treat empty `.env` values (e.g. `DB_PORT=`) as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def build_url(self) -> URL:
        """Build the async SQLAlchemy URL for the configured backend."""
        if self.url:
            return make_url(self.url)

        if self.type is DatabaseType.SQLITE:
            return URL.create(drivername=DRIVERS[self.type], database=self.database)

        return URL.create(
            drivername=DRIVERS[self.type],
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port or DEFAULT_PORTS[self.type],
            database=self.database,
        )

    def get_url(self) -> str:
        """The URL as a string, password included."""
        if self.url:
            return self.url
        return self.build_url().render_as_string(hide_password=False)

    def get_safe_url(self) -> str:
        """URL suitable for display (password masked)."""
        try:
            return self.build_url().render_as_string(hide_password=True)
        except ArgumentError:
            return "<invalid DB_URL>"


class ServerSettings(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        extra="ignore",
    )

    host: str = Field(
        default="127.0.0.1",
        description="Server bind address"
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Server bind port"
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key required in X-API-Key (None = open API)"
    )

    @field_validator('api_key', mode='before')
    @classmethod
    def empty_key_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_cors_origins(self) -> list[str]:
        """Parse the configured CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class LogSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=DEFAULT_ENV_FILE,
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level"
    )
    format: str = Field(
        default="json",
        description="Log format (json, console)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'console'")
        return v_lower


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from:
    1. Environment variables
    2. The `.env` file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="USERAPI_",
        extra="ignore",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    def validate_all(self) -> list[str]:
        """
        Validate cross-field settings.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        db = self.database

        if db.url is None and db.type is not DatabaseType.SQLITE:
            if not db.host:
                errors.append(f"DB_HOST is required for {db.type.value}")
            if not db.database:
                errors.append(f"DB_DATABASE is required for {db.type.value}")
            if not db.username:
                errors.append(f"DB_USERNAME is not set for {db.type.value}")

        if db.url is not None:
            try:
                make_url(db.url)
            except ArgumentError as e:
                errors.append(f"Invalid DB_URL: {e}")

        return errors


def load_settings(env_file: Optional[Union[str, Path]] = DEFAULT_ENV_FILE) -> Settings:
    """
    Build settings from a specific `.env` file.

    Args:
        env_file: Path to the env file (None disables file loading)
    """
    return Settings(
        database=DatabaseSettings(_env_file=env_file),
        server=ServerSettings(_env_file=env_file),
        log=LogSettings(_env_file=env_file),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    return load_settings(DEFAULT_ENV_FILE)
