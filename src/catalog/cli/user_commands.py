"""User management CLI commands."""

import typer
from rich.table import Table

from src.catalog.entities.core.user import User, UserRepository

from .utils import console, get_database_service

users_app = typer.Typer(help="Manage catalog users")


@users_app.command("add")
def add_user(
    first_name: str = typer.Argument(..., help="First name"),
    last_name: str = typer.Argument(..., help="Last name"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
    admin: bool = typer.Option(False, "--admin/--no-admin", help="Allow managing products"),
) -> None:
    """Create a user and print the id to send in the identity header."""
    with get_database_service().session_scope() as session:
        user = UserRepository(session).create(
            User(first_name=first_name, last_name=last_name, email=email, is_admin=admin)
        )

    role = "admin" if user.is_admin else "user"
    console.print(f"[green]✅ Created {role} {user.full_name}[/green]")
    console.print(f"ID: [cyan]{user.id}[/cyan]")


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    with get_database_service().session_scope() as session:
        users = UserRepository(session).list_all()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Admin", style="yellow")

    for user in users:
        table.add_row(user.id, user.full_name, user.email or "", "✅" if user.is_admin else "")

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")
