"""
Utility commands for userapi CLI.

Contains init (scaffold a .env file) and config (show effective settings).
"""

from enum import Enum
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import DatabaseType, load_settings
from ..core.env_file import default_env_values, write_env_file

console = Console()


class DatabaseChoice(str, Enum):
    sqlite = "sqlite"
    postgres = "postgres"
    mysql = "mysql"
    mariadb = "mariadb"


def register_util_commands(app: typer.Typer):
    """Register utility commands with the main app."""

    @app.command()
    def init(
        path: Annotated[str, typer.Option("--path", help="Where to write the .env file")] = ".env",
        db_type: Annotated[DatabaseChoice, typer.Option("--db-type", "-d", help="Database backend")] = DatabaseChoice.sqlite,
        port: Annotated[int, typer.Option("--port", "-p", min=1, max=65535, help="HTTP port")] = 3000,
        force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
    ):
        """Scaffold a .env file with database and server settings."""
        values = default_env_values(DatabaseType(db_type.value))
        values["PORT"] = str(port)

        try:
            written = write_env_file(path, values, overwrite=force)
        except FileExistsError:
            console.print(f"[red]{path} already exists. Use --force to overwrite.[/red]")
            raise typer.Exit(1)

        console.print(f"[green]Wrote {written}[/green]")
        if db_type != DatabaseChoice.sqlite:
            console.print("[dim]Fill in DB_PASSWORD, then run: userapi db create[/dim]")
        console.print("[dim]Start the API with: userapi serve[/dim]")

    @app.command("config")
    def show_config(
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Show the effective configuration."""
        try:
            settings = load_settings(env_file)
        except ValidationError as e:
            console.print(f"[red]Invalid configuration:[/red]\n{escape(str(e))}")
            raise typer.Exit(1)

        table = Table(title="Configuration", show_header=False)
        table.add_column("Key", style="cyan")
        table.add_column("Value")

        db = settings.database
        table.add_row("DB_TYPE", db.type.value)
        table.add_row("Database URL", db.get_safe_url())
        table.add_row("DB_SYNCHRONIZE", str(db.synchronize))
        table.add_row("HOST", settings.server.host)
        table.add_row("PORT", str(settings.server.port))
        table.add_row("API key", "set" if settings.server.api_key else "not set")
        table.add_row("CORS origins", ", ".join(settings.server.get_cors_origins()) or "-")
        table.add_row("LOG_LEVEL", settings.log.level)
        table.add_row("LOG_FORMAT", settings.log.format)
        console.print(table)

        problems = settings.validate_all()
        for problem in problems:
            console.print(f"[yellow]Warning: {escape(problem)}[/yellow]")
        if problems:
            raise typer.Exit(1)
