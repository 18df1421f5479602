"""
Command modules for userapi CLI.

Split into logical groupings:
- server: serve command
- user: user CRUD commands
- db: table management commands
- utils: utility commands (init, config)
"""

from .server import register_server_commands
from .user import register_user_commands
from .db import register_db_commands
from .utils import register_util_commands

__all__ = [
    "register_server_commands",
    "register_user_commands",
    "register_db_commands",
    "register_util_commands",
]
