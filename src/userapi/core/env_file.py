"""
`.env` file scaffolding.

Renders, writes and reads the environment file consumed by
`userapi.core.config`.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from .config import DEFAULT_PORTS, DatabaseType
from .logging import get_logger


logger = get_logger(__name__)


# Order in which keys are written to a fresh `.env`
ENV_KEYS = [
    "DB_TYPE",
    "DB_HOST",
    "DB_PORT",
    "DB_USERNAME",
    "DB_PASSWORD",
    "DB_DATABASE",
    "PORT",
]

_HEADER = "# Generated by userapi init. Environment variables override these values.\n"


def default_env_values(db_type: DatabaseType = DatabaseType.SQLITE) -> dict[str, str]:
    """
    Default `.env` values for a database backend.

    Args:
        db_type: Target database backend

    Returns:
        Mapping of env keys to values, in ENV_KEYS order
    """
    if db_type is DatabaseType.SQLITE:
        return {
            "DB_TYPE": db_type.value,
            "DB_HOST": "",
            "DB_PORT": "",
            "DB_USERNAME": "",
            "DB_PASSWORD": "",
            "DB_DATABASE": "app.db",
            "PORT": "3000",
        }

    return {
        "DB_TYPE": db_type.value,
        "DB_HOST": "localhost",
        "DB_PORT": str(DEFAULT_PORTS[db_type]),
        "DB_USERNAME": "app",
        "DB_PASSWORD": "",
        "DB_DATABASE": "app",
        "PORT": "3000",
    }


# Characters that force a value into double quotes
_QUOTE_TRIGGERS = set(' #"\'\\$\n\r\t')

_ESCAPES = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
]


def _quote(value: str) -> str:
    # dotenv expands ${VAR} even inside quotes and has no escape for it
    if "${" in value:
        raise ValueError(f"Value cannot be stored in a .env file: {value!r}")
    if _QUOTE_TRIGGERS.intersection(value) or value != value.strip():
        for raw, escaped in _ESCAPES:
            value = value.replace(raw, escaped)
        return f'"{value}"'
    return value


def render_env_file(values: dict[str, str]) -> str:
    """
    Render `.env` content.

    Known keys come first in ENV_KEYS order; any extra keys follow
    in insertion order.

    Raises:
        ValueError: If a value contains `${`, which dotenv would expand
    """
    lines = [_HEADER]
    for key in ENV_KEYS:
        if key in values:
            lines.append(f"{key}={_quote(str(values[key]))}\n")
    for key, value in values.items():
        if key not in ENV_KEYS:
            lines.append(f"{key}={_quote(str(value))}\n")
    return "".join(lines)


def write_env_file(
    path: Union[str, Path],
    values: Optional[dict[str, str]] = None,
    overwrite: bool = False
) -> Path:
    """
    Write a `.env` file.

    Args:
        path: Destination file
        values: Values to write (defaults to the sqlite scaffold)
        overwrite: Replace an existing file

    Returns:
        The written path

    Raises:
        FileExistsError: If the file exists and overwrite is False
        ValueError: If a value cannot be represented in a .env file
    """
    path = Path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists")

    if values is None:
        values = default_env_values()

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_env_file(values), encoding="utf-8")

    # May hold a database password
    if os.name != 'nt':
        os.chmod(path, 0o600)

    logger.info("Wrote env file", file=str(path), keys=len(values))
    return path


def read_env_file(path: Union[str, Path]) -> dict[str, str]:
    """
    Parse a `.env` file into a dict.

    Uses python-dotenv, the parser pydantic-settings reads the same file
    with, so quoting, escapes and `${VAR}` expansion match what the
    settings see. Keys without a value are skipped.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"{path} does not exist")

    return {
        key: value
        for key, value in dotenv_values(path, encoding="utf-8").items()
        if value is not None
    }
