"""Domain exceptions.

All domain-level errors that represent business rule violations or
missing records. Services raise these; the API layer maps each family
to an HTTP status.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.

    Attributes:
        error_code: Machine-readable error code.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Base class for errors about records that must exist but don't."""

    error_code = "NOT_FOUND"


class ValidationError(DomainError):
    """Base class for malformed input."""

    error_code = "VALIDATION_ERROR"


class ConflictError(DomainError):
    """Base class for uniqueness violations."""

    error_code = "CONFLICT"


# ============================================================================
# Cart Errors
# ============================================================================


class CartNotFoundError(NotFoundError):
    """Raised when a user has no cart and the operation requires one."""

    error_code = "CART_NOT_FOUND"

    def __init__(self, user_id: str) -> None:
        """Initialize cart not found error.

        Args:
            user_id: Owner of the missing cart.
        """
        super().__init__(
            f"Cart not found for user {user_id}",
            details={"user_id": user_id},
        )


class CartItemNotFoundError(NotFoundError):
    """Raised when a cart item is not found."""

    error_code = "CART_ITEM_NOT_FOUND"

    def __init__(self, cart_id: str, product_id: str) -> None:
        """Initialize cart item not found error.

        Args:
            cart_id: ID of the cart.
            product_id: Product the item was expected to reference.
        """
        super().__init__(
            f"Item for product {product_id} not found in cart {cart_id}",
            details={"cart_id": cart_id, "product_id": product_id},
        )


class InvalidQuantityError(ValidationError):
    """Raised when an invalid quantity is provided."""

    error_code = "INVALID_QUANTITY"

    def __init__(self, quantity: int, reason: str = "Quantity must be positive") -> None:
        """Initialize invalid quantity error.

        Args:
            quantity: The invalid quantity value.
            reason: Explanation of why the quantity is invalid.
        """
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            details={"quantity": quantity, "reason": reason},
        )


# ============================================================================
# Catalog Errors
# ============================================================================


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class InvalidReferenceError(ValidationError):
    """Raised when a product points at a category or color that doesn't exist."""

    error_code = "INVALID_REFERENCE"

    def __init__(self, field: str, value: str) -> None:
        """Initialize invalid reference error.

        Args:
            field: Name of the reference field (``category_id``/``color_id``).
            value: The unresolved identifier.
        """
        super().__init__(
            f"{field} does not reference an existing record: {value}",
            details={field: value},
        )


class InvalidHexColorError(ValidationError):
    """Raised when a color hex code is malformed."""

    error_code = "INVALID_HEX_COLOR"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid hex color '{value}': expected #RGB or #RRGGBB",
            details={"hex": value},
        )


class InvalidSlugError(ValidationError):
    """Raised when a slug is empty after normalization."""

    error_code = "INVALID_SLUG"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid slug '{value}'",
            details={"slug": value},
        )


class DuplicateSlugError(ConflictError):
    """Raised when a category or color slug (or color name) is already taken."""

    error_code = "DUPLICATE_SLUG"

    def __init__(self, entity_type: str, field: str, value: str) -> None:
        """Initialize duplicate slug error.

        Args:
            entity_type: "Category" or "Color".
            field: Field that collided.
            value: Colliding value.
        """
        super().__init__(
            f"{entity_type} with {field} '{value}' already exists",
            details={"entity_type": entity_type, field: value},
        )
