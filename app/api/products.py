"""Product API endpoints.

Provides the shop listing (slug-based filters, sorting, pagination)
and product administration endpoints.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.categories import category_to_response
from app.api.colors import color_to_response
from app.api.dependencies import get_catalog_service
from app.api.schemas import (
    ErrorResponse,
    MessageResponse,
    PaginationSchema,
    ProductCreateRequest,
    ProductPageResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from app.catalog.service import CatalogService, PaginatedResult, ProductInput
from app.domain.views import ProductView

router = APIRouter(prefix="/products", tags=["Products"])

# Fields that may be cleared with an explicit null
NULLABLE_FIELDS = {"color_id"}


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: ProductView) -> ProductResponse:
    """Convert ProductView to response schema."""
    return ProductResponse(
        id=product.id,
        category_id=product.category_id,
        color_id=product.color_id,
        name=product.name,
        description=product.description,
        price=float(product.price),
        stock=product.stock,
        images=product.images,
        features=product.features,
        color=color_to_response(product.color) if product.color else None,
        category=category_to_response(product.category) if product.category else None,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def page_to_response(result: PaginatedResult[ProductView]) -> ProductPageResponse:
    """Convert a paginated listing to response schema."""
    return ProductPageResponse(
        items=[product_to_response(p) for p in result.items],
        pagination=PaginationSchema(
            total=result.total,
            page=result.page,
            per_page=result.page_size,
            total_pages=result.total_pages,
        ),
    )


# ============================================================================
# Shop Listing
# ============================================================================


async def _shop_listing(
    service: CatalogService,
    category_slug: str | None,
    color: str | None,
    sort: str | None,
    page: str | None,
    limit: str | None,
    exclude: str | None,
) -> ProductPageResponse:
    result = await service.list_shop_products(
        category_slug=category_slug,
        color_slug=color,
        sort=sort,
        page=page,
        limit=limit,
        exclude_id=exclude,
    )
    return page_to_response(result)


@router.get(
    "/shop",
    response_model=ProductPageResponse,
    summary="Shop listing",
    description="List products across all categories with optional color filter, sort and pagination.",
)
async def list_shop_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    color: Annotated[str | None, Query(description="Color slug")] = None,
    sort: Annotated[str | None, Query(description="price_asc, price_desc; anything else is newest first")] = None,
    page: Annotated[str | None, Query(description="Page number, coerced to >= 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, clamped to 1..100")] = None,
    exclude: Annotated[str | None, Query(description="Product ID to leave out")] = None,
) -> ProductPageResponse:
    """List products for the shop.

    Malformed ``page``/``limit`` values are coerced, never rejected, and an
    unknown color slug simply drops the color filter.
    """
    return await _shop_listing(service, None, color, sort, page, limit, exclude)


@router.get(
    "/shop/{category_slug}",
    response_model=ProductPageResponse,
    summary="Shop listing for a category",
    description="List products of one category. Unknown categories yield an empty page.",
)
async def list_shop_category_products(
    category_slug: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    color: Annotated[str | None, Query(description="Color slug")] = None,
    sort: Annotated[str | None, Query(description="price_asc, price_desc; anything else is newest first")] = None,
    page: Annotated[str | None, Query(description="Page number, coerced to >= 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, clamped to 1..100")] = None,
    exclude: Annotated[str | None, Query(description="Product ID to leave out")] = None,
) -> ProductPageResponse:
    """List products of a category for the shop.

    Args:
        category_slug: Category slug (case-insensitive).

    Returns:
        Paginated products; an empty page if the category doesn't exist.
    """
    return await _shop_listing(service, category_slug, color, sort, page, limit, exclude)


# ============================================================================
# Products
# ============================================================================


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List products",
    description="List all products, newest first, optionally for one category.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    category_id: Annotated[str | None, Query()] = None,
) -> list[ProductResponse]:
    """List all products."""
    products = await service.list_all_products(category_id=category_id)
    return [product_to_response(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a product with its category and color.

    Raises:
        ProductNotFoundError: If the product doesn't exist (404).
    """
    return product_to_response(await service.get_product(product_id))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(
    request: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Create a product.

    The category (and color, if given) must already exist.
    """
    product = await service.create_product(
        ProductInput(
            category_id=request.category_id,
            color_id=request.color_id,
            name=request.name,
            description=request.description,
            price=Decimal(str(request.price)),
            stock=request.stock,
            images=request.images,
            features=request.features,
        )
    )
    return product_to_response(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Partially update a product."""
    changes = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    return product_to_response(await service.update_product(product_id, changes))


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> MessageResponse:
    """Delete a product. Carts that reference it are left untouched."""
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
