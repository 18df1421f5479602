"""
userapi Core Module

Core configuration, settings, and utilities.
"""

from .config import (
    Settings,
    DatabaseSettings,
    DatabaseType,
    ServerSettings,
    LogSettings,
    get_settings,
    is_memory_url,
    load_settings,
)
from .logging import setup_logging, get_logger
from .env_file import (
    ENV_KEYS,
    default_env_values,
    render_env_file,
    write_env_file,
    read_env_file,
)

__all__ = [
    # Settings
    "Settings",
    "DatabaseSettings",
    "DatabaseType",
    "ServerSettings",
    "LogSettings",
    "get_settings",
    "load_settings",
    "is_memory_url",
    # Logging
    "setup_logging",
    "get_logger",
    # .env scaffolding
    "ENV_KEYS",
    "default_env_values",
    "render_env_file",
    "write_env_file",
    "read_env_file",
]
