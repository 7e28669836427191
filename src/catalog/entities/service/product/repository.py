"""Data access for products."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from src.catalog.core.errors import PersistenceError
from src.catalog.entities.core._base import utcnow

from .entity import Product, ProductPage
from .table import ProductTable

DEFAULT_PAGE_SIZE = 5


class ProductRepository:
    """Data-access layer for products.

    The repository flushes so that ids and defaults are populated, but never
    commits: the owning session decides the transaction boundary.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def _flush(self, action: str) -> None:
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            logger.error("Product {} violated a database constraint: {}", action, e.orig)
            raise PersistenceError(f"Could not {action} product") from e

    def create(self, payload: Mapping[str, Any]) -> Product:
        row = ProductTable(name=payload["name"], price=Decimal(payload["price"]))
        self._session.add(row)
        self._flush("create")
        self._session.refresh(row)
        logger.debug("Created product {}", row.id)
        return self._to_entity(row)

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def update(self, product_id: int, payload: Mapping[str, Any]) -> Product | None:
        """Replace name and price of an existing product."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None

        row.name = payload["name"]
        row.price = Decimal(payload["price"])
        row.updated_at = utcnow()
        self._session.add(row)
        self._flush("update")
        self._session.refresh(row)
        logger.debug("Updated product {}", product_id)
        return self._to_entity(row)

    def delete(self, product_id: int) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._flush("delete")
        logger.debug("Deleted product {}", product_id)
        return True

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(ProductTable)).one()

    def list(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        order: str = "asc",
    ) -> ProductPage:
        """Return one page of products ordered by id.

        Args:
            page: 1-based page number
            page_size: Number of products per page
            order: ``"asc"`` for insertion order, ``"desc"`` for newest first
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")

        ordering = ProductTable.id.desc() if order == "desc" else ProductTable.id.asc()
        statement = (
            select(ProductTable)
            .order_by(ordering)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        rows = self._session.exec(statement).all()
        return ProductPage(
            items=[self._to_entity(row) for row in rows],
            page=page,
            page_size=page_size,
            total=self.count(),
        )
