"""
User management commands for userapi CLI.

Contains the user subcommands: add, list, show, update, remove.
They go through the same UserService as the REST API.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import load_settings
from ..db.database import Database
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserCreate, UserResponse, UserUpdate
from ..services.user_service import UserService

console = Console()


async def _with_service(env_file: str, action: Callable[[UserService], Awaitable[Any]]) -> Any:
    """Open a database session, run `action` with a UserService, clean up."""
    settings = load_settings(env_file)
    database = Database.from_settings(settings)
    try:
        if settings.database.synchronize:
            await database.create_all()
        async with database.session() as session:
            return await action(UserService(UserRepository(session)))
    finally:
        await database.dispose()


def run_user_action(env_file: str, action: Callable[[UserService], Awaitable[Any]]) -> Any:
    """Run a service action, turning failures into CLI errors."""
    try:
        return asyncio.run(_with_service(env_file, action))
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except SQLAlchemyError as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _validation_message(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


def _user_table(users: list[UserResponse], title: str = "Users") -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Email", style="green")
    table.add_column("Created", style="dim")
    for user in users:
        table.add_row(
            str(user.id),
            escape(user.name),
            escape(user.email),
            user.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def register_user_commands(app: typer.Typer):
    """Register user subcommands with the app."""

    user_app = typer.Typer(
        help="Manage users.",
        no_args_is_help=True,
    )
    app.add_typer(user_app, name="user")

    @user_app.command("add")
    def user_add(
        name: Annotated[str, typer.Argument(help="Display name")],
        email: Annotated[str, typer.Argument(help="Unique email address")],
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Create a user."""
        try:
            data = UserCreate(name=name, email=email)
        except ValidationError as e:
            console.print(f"[red]Error: {escape(_validation_message(e))}[/red]")
            raise typer.Exit(1)

        user = run_user_action(env_file, lambda service: service.create(data))
        console.print(f"[green]User {user.id} created: {user.name} <{user.email}>[/green]")

    @user_app.command("list")
    def user_list(
        search: Annotated[Optional[str], typer.Option("--search", "-s", help="Filter by name or email")] = None,
        skip: Annotated[int, typer.Option("--skip", min=0, help="Users to skip")] = 0,
        limit: Annotated[int, typer.Option("--limit", min=1, max=1000, help="Maximum users to show")] = 100,
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """List users."""
        async def action(service: UserService):
            return await service.list(skip=skip, limit=limit, search=search), await service.count(search=search)

        users, total = run_user_action(env_file, action)

        if not users:
            console.print("[yellow]No users found[/yellow]")
            return

        console.print(_user_table(users))
        console.print(f"[dim]Showing {len(users)} of {total}[/dim]")

    @user_app.command("show")
    def user_show(
        user_id: Annotated[int, typer.Argument(help="User id", min=1)],
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Show a single user."""
        user = run_user_action(env_file, lambda service: service.get(user_id))
        if user is None:
            console.print(f"[red]User not found: {user_id}[/red]")
            raise typer.Exit(1)
        console.print(_user_table([user], title=f"User {user_id}"))

    @user_app.command("update")
    def user_update(
        user_id: Annotated[int, typer.Argument(help="User id", min=1)],
        name: Annotated[Optional[str], typer.Option("--name", "-n", help="New display name")] = None,
        email: Annotated[Optional[str], typer.Option("--email", "-m", help="New email address")] = None,
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Update a user's name and/or email."""
        try:
            data = UserUpdate(name=name, email=email)
        except ValidationError as e:
            console.print(f"[red]Error: {escape(_validation_message(e))}[/red]")
            raise typer.Exit(1)

        user = run_user_action(env_file, lambda service: service.update(user_id, data))
        if user is None:
            console.print(f"[red]User not found: {user_id}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]User {user.id} updated: {user.name} <{user.email}>[/green]")

    @user_app.command("remove")
    def user_remove(
        user_id: Annotated[int, typer.Argument(help="User id", min=1)],
        yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
        env_file: Annotated[str, typer.Option("--env-file", "-e", help="Path to the .env file")] = ".env",
    ):
        """Delete a user."""
        if not yes:
            typer.confirm(f"Delete user {user_id}?", abort=True)

        deleted = run_user_action(env_file, lambda service: service.delete(user_id))
        if not deleted:
            console.print(f"[red]User not found: {user_id}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]User {user_id} deleted[/green]")
