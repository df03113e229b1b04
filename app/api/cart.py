"""Cart API endpoints.

Every endpoint acts on the cart of the user named in the ``X-User-ID``
header and returns the cart with products populated.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import get_cart_service, get_current_user_id
from app.api.products import product_to_response
from app.api.schemas import (
    AddCartItemRequest,
    CartItemResponse,
    CartResponse,
    ErrorResponse,
    UpdateCartItemRequest,
)
from app.cart.service import CartService
from app.domain.views import CartView

router = APIRouter(prefix="/cart", tags=["Cart"])


# ============================================================================
# Converters
# ============================================================================


def cart_to_response(cart: CartView) -> CartResponse:
    """Convert CartView to response schema."""
    return CartResponse(
        id=cart.id,
        user_id=cart.user_id,
        items=[
            CartItemResponse(
                product_id=item.product_id,
                quantity=item.quantity,
                product=product_to_response(item.product) if item.product else None,
            )
            for item in cart.items
        ],
        item_count=cart.item_count,
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=CartResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Get cart",
    description="Get the current user's cart. An empty cart is created on first access.",
)
async def get_cart(
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[CartService, Depends(get_cart_service)],
) -> CartResponse:
    """Get the user's cart, creating it if needed."""
    return cart_to_response(await service.get_cart(user_id))


@router.post(
    "/items",
    response_model=CartResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Add cart item",
    description="Add one unit of a product. Adding a product already in the cart increments its quantity.",
)
async def add_cart_item(
    request: AddCartItemRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[CartService, Depends(get_cart_service)],
) -> CartResponse:
    """Add one unit of a product to the user's cart."""
    return cart_to_response(await service.add_item(user_id, request.product_id))


@router.put(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Update cart item quantity",
)
async def update_cart_item_quantity(
    product_id: str,
    request: UpdateCartItemRequest,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[CartService, Depends(get_cart_service)],
) -> CartResponse:
    """Replace the quantity of a cart line.

    Returns 404 if the user has no cart or the product isn't in it.
    """
    cart = await service.update_quantity(user_id, product_id, request.quantity)
    return cart_to_response(cart)


@router.delete(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Remove cart item",
)
async def remove_cart_item(
    product_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[CartService, Depends(get_cart_service)],
) -> CartResponse:
    """Remove a product from the cart.

    Returns 404 if the user has no cart; removing a product that is not
    in the cart succeeds and changes nothing.
    """
    return cart_to_response(await service.remove_item(user_id, product_id))
