"""Main CLI application module."""

import typer

from src.catalog.api.utils.app_startup import configure_logging

from .db_commands import db_app
from .product_commands import products_app
from .serve_command import serve
from .user_commands import users_app

app = typer.Typer(
    help="🛒 Product catalog management CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(products_app, name="products")
app.command("serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
