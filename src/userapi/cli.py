"""
Command Line Interface for userapi.

Provides commands for scaffolding configuration, running the API
server, managing tables and users.

Built with Typer for automatic tab completion.
"""

from typing import Annotated

import typer
from rich.console import Console

from . import __version__
from .commands import (
    register_db_commands,
    register_server_commands,
    register_user_commands,
    register_util_commands,
)

console = Console()

# Create the main app
app = typer.Typer(
    name="userapi",
    help="userapi - CRUD REST API over a User entity",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def version_callback(value: bool):
    if value:
        console.print(f"userapi version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit.")] = False,
):
    """
    userapi - CRUD REST API over a User entity

    Configure with a .env file (userapi init), then run: userapi serve
    """
    pass


register_util_commands(app)
register_server_commands(app)
register_db_commands(app)
register_user_commands(app)


# Entry point for the CLI
def cli():
    """Main entry point."""
    app()


if __name__ == "__main__":
    cli()
