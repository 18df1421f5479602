"""
Server commands for userapi CLI.
"""

from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..core.config import load_settings
from ..core.logging import setup_logging

console = Console()


def register_server_commands(app: typer.Typer):
    """Register server commands with the main app."""

    @app.command()
    def serve(
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
        host: Annotated[Optional[str], typer.Option("--host", "-h", help="Host to bind to (default: HOST)")] = None,
        port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port to listen on (default: PORT)")] = None,
        reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes")] = False,
    ):
        """Start the REST API server."""
        from ..api.app import run_server

        settings = load_settings(env_file)
        for problem in settings.validate_all():
            console.print(f"[yellow]Warning: {escape(problem)}[/yellow]")

        setup_logging(settings.log.level, settings.log.format, settings.log.file)

        host = host or settings.server.host
        port = port or settings.server.port

        console.print(Panel.fit(
            f"[bold]userapi[/bold] listening on [cyan]http://{host}:{port}[/cyan]\n"
            f"Database: [dim]{settings.database.get_safe_url()}[/dim]\n"
            f"Docs: [dim]http://{host}:{port}/docs[/dim]",
            border_style="green",
        ))

        run_server(host=host, port=port, reload=reload, env_file=env_file)
