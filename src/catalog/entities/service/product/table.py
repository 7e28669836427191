"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.catalog.entities.core._base import TimestampedTable


class ProductTable(TimestampedTable, table=True):
    """Database persistence model for products.

    Uses an autoincrement integer key rather than the UUID key of
    ``EntityTable`` so that listings have a stable insertion order.
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    price: Decimal = Field(max_digits=10, decimal_places=2, nullable=False)
