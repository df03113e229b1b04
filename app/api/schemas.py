"""API schemas for the storefront API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.cart.service import MAX_QUANTITY


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class PaginationSchema(BaseModel):
    """Pagination block of a listing."""

    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., ge=1, description="Current page number (1-based)")
    per_page: int = Field(..., ge=1, le=100, description="Items per page")
    total_pages: int = Field(..., description="ceil(total / per_page)")


# ============================================================================
# Catalog Schemas
# ============================================================================


class ColorResponse(BaseModel):
    """A product color."""

    id: str
    name: str
    slug: str
    hex: str | None = None


class ColorCreateRequest(BaseModel):
    """Request to create a color."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    hex: str | None = Field(
        default=None,
        description="Hex code, #RGB or #RRGGBB",
        examples=["#1976d2"],
    )


class CategoryResponse(BaseModel):
    """A product category."""

    id: str
    name: str
    slug: str


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)


class ProductResponse(BaseModel):
    """A product with its color (and on detail reads, category) resolved."""

    id: str = Field(..., description="Product identifier")
    category_id: str = Field(..., description="Owning category")
    color_id: str | None = Field(default=None, description="Color identifier")
    name: str
    description: str = ""
    price: float = Field(..., description="Unit price")
    stock: int = Field(..., description="Units on hand")
    images: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    color: ColorResponse | None = Field(default=None, description="Resolved color")
    category: CategoryResponse | None = Field(
        default=None, description="Resolved category (detail reads only)"
    )
    created_at: datetime
    updated_at: datetime


class ProductPageResponse(BaseModel):
    """One page of a shop listing."""

    items: list[ProductResponse]
    pagination: PaginationSchema


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    category_id: str = Field(..., min_length=1)
    color_id: str | None = None
    name: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    price: float = Field(..., gt=0)
    stock: int = Field(..., ge=0)
    images: list[str] = Field(..., min_length=1)
    features: list[str] = Field(default_factory=list)


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""

    category_id: str | None = Field(default=None, min_length=1)
    color_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    price: float | None = Field(default=None, gt=0)
    stock: int | None = Field(default=None, ge=0)
    images: list[str] | None = None
    features: list[str] | None = None


# ============================================================================
# Cart Schemas
# ============================================================================


class CartItemResponse(BaseModel):
    """A cart line.

    ``product`` is null when the referenced product no longer exists.
    """

    product_id: str
    quantity: int
    product: ProductResponse | None = None


class CartResponse(BaseModel):
    """A user's cart with every line populated."""

    id: str
    user_id: str
    items: list[CartItemResponse] = Field(default_factory=list)
    item_count: int = Field(..., description="Total units across all lines")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AddCartItemRequest(BaseModel):
    """Request to add one unit of a product to the cart."""

    product_id: str = Field(..., min_length=1)


class UpdateCartItemRequest(BaseModel):
    """Request to replace a cart line's quantity."""

    quantity: int = Field(
        ..., le=MAX_QUANTITY, description=f"New quantity, 1 to {MAX_QUANTITY}"
    )
