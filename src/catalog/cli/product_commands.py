"""Product CLI commands."""

import random
from decimal import Decimal

import typer
from rich.table import Table

from src.catalog.entities.service.product import ProductRepository
from src.catalog.runtime.context import get_config

from .utils import console, get_database_service

products_app = typer.Typer(help="Inspect and seed products")

_ADJECTIVES = ["Classic", "Compact", "Deluxe", "Eco", "Portable", "Smart", "Vintage", "Wireless"]
_NOUNS = ["Backpack", "Blender", "Desk Lamp", "Headphones", "Kettle", "Notebook", "Speaker", "Watch"]


def fake_product(rng: random.Random) -> dict[str, object]:
    """Random but valid product data."""
    return {
        "name": f"{rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}",
        "price": Decimal(rng.randint(100, 99999)) / 100,
    }


@products_app.command("seed")
def seed_products(
    count: int = typer.Argument(10, min=1, help="Number of products to create"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for repeatable data"),
) -> None:
    """Create ``count`` products with random names and prices."""
    rng = random.Random(seed)
    with get_database_service().session_scope() as session:
        repository = ProductRepository(session)
        for _ in range(count):
            repository.create(fake_product(rng))
        total = repository.count()

    console.print(f"[green]✅ Created {count} products ({total} in total)[/green]")


@products_app.command("list")
def list_products(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """List one page of products, as the web listing shows it."""
    catalog_config = get_config().catalog
    with get_database_service().session_scope() as session:
        products = ProductRepository(session).list(
            page=page,
            page_size=catalog_config.per_page,
            order=catalog_config.list_order,
        )

    if products.is_empty:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title=f"Products (page {products.page} of {products.total_pages})")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Price", style="magenta", justify="right")

    for product in products.items:
        table.add_row(str(product.id), product.name, f"{product.price:.2f}")

    console.print(table)
