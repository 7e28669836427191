"""Pure decision functions used by the product workflow."""

from .authorization import Action, authorize, is_allowed
from .validation import (
    InvalidProduct,
    ProductPayload,
    ValidationResult,
    ValidProduct,
    validate_product,
)

__all__ = [
    "Action",
    "authorize",
    "is_allowed",
    "InvalidProduct",
    "ProductPayload",
    "ValidationResult",
    "ValidProduct",
    "validate_product",
]
