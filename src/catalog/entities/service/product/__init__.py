"""Entity package: Product."""

from .entity import Product, ProductPage
from .repository import ProductRepository
from .table import ProductTable

__all__ = ["Product", "ProductPage", "ProductRepository", "ProductTable"]
