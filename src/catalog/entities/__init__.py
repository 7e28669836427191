"""Entities organised by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserRepository, UserTable
from .service.product import Product, ProductPage, ProductRepository, ProductTable

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
    "Product",
    "ProductPage",
    "ProductTable",
    "ProductRepository",
]
