"""
Database commands for userapi CLI.
"""

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import load_settings
from ..db.database import Database

console = Console()


async def _create_tables(database: Database) -> None:
    try:
        await database.create_all()
    finally:
        await database.dispose()


async def _drop_tables(database: Database) -> None:
    try:
        await database.drop_all()
    finally:
        await database.dispose()


def register_db_commands(app: typer.Typer):
    """Register database subcommands with the app."""

    db_app = typer.Typer(
        help="Manage database tables.",
        no_args_is_help=True,
    )
    app.add_typer(db_app, name="db")

    @db_app.command("create")
    def db_create(
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Create missing tables."""
        settings = load_settings(env_file)
        database = Database.from_settings(settings)
        try:
            asyncio.run(_create_tables(database))
        except SQLAlchemyError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]Tables created in {settings.database.get_safe_url()}[/green]")

    @db_app.command("drop")
    def db_drop(
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
        yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    ):
        """Drop all tables (deletes every row)."""
        settings = load_settings(env_file)
        if not yes:
            typer.confirm(
                f"Drop all tables in {settings.database.get_safe_url()}?",
                abort=True,
            )
        database = Database.from_settings(settings)
        try:
            asyncio.run(_drop_tables(database))
        except SQLAlchemyError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print("[green]Tables dropped[/green]")
