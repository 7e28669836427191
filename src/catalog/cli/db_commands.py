"""Database schema commands."""

import typer
from rich.prompt import Confirm

from src.catalog.core.services import DbManageService

from .utils import console, get_database_service

db_app = typer.Typer(help="Manage the catalog database schema")


@db_app.command("init")
def init_db() -> None:
    """Create any missing tables."""
    DbManageService(get_database_service().engine).create_all()
    console.print("[green]✅ Database tables created[/green]")


@db_app.command("reset")
def reset_db(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Drop and recreate every table. All data is lost."""
    if not force and not Confirm.ask("[yellow]Drop all tables and data?[/yellow]"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=1)

    manager = DbManageService(get_database_service().engine)
    manager.drop_all()
    manager.create_all()
    console.print("[green]✅ Database reset[/green]")
