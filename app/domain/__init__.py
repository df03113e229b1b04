"""Domain layer module.

Contains value objects, read models and domain exceptions for the
storefront catalog and cart.
"""

from app.domain.base import ValueObject
from app.domain.exceptions import (
    CartItemNotFoundError,
    CartNotFoundError,
    ConflictError,
    DomainError,
    DuplicateSlugError,
    InvalidHexColorError,
    InvalidQuantityError,
    InvalidReferenceError,
    InvalidSlugError,
    NotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from app.domain.value_objects import HexColor, Slug
from app.domain.views import (
    CartItemView,
    CartView,
    CategoryView,
    ColorView,
    ProductView,
)

__all__ = [
    # Base
    "ValueObject",
    # Value objects
    "HexColor",
    "Slug",
    # Views
    "CartItemView",
    "CartView",
    "CategoryView",
    "ColorView",
    "ProductView",
    # Exceptions
    "CartItemNotFoundError",
    "CartNotFoundError",
    "ConflictError",
    "DomainError",
    "DuplicateSlugError",
    "InvalidHexColorError",
    "InvalidQuantityError",
    "InvalidReferenceError",
    "InvalidSlugError",
    "NotFoundError",
    "ProductNotFoundError",
    "ValidationError",
]
