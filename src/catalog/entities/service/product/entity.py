"""Entity: Product."""

import math
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, computed_field

from src.catalog.entities.core._base import TimestampedEntity


class Product(TimestampedEntity):
    """Product entity representing an item in the catalog.

    Identifiers are assigned by the database on insert and grow
    monotonically, so ``id`` is ``None`` only for products not yet stored.
    """

    id: int | None = Field(default=None, description="Server-assigned identifier")
    name: str = Field(min_length=3, max_length=255, description="Product name")
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2, description="Unit price")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.price,
        ))


class ProductPage(BaseModel):
    """One page of the product listing."""

    items: list[Product] = Field(default_factory=list)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total: int = Field(ge=0)

    @computed_field
    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def __contains__(self, product: object) -> bool:
        return product in self.items
