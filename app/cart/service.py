"""Cart application service.

Orchestrates per-user shopping carts:
- Lazy cart creation on first read or add
- Item merge (adding a product twice bumps its quantity)
- Quantity replacement and item removal
- Populating cart lines with full product data
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.cart.models import CartModel
from app.cart.repository import CartRepository
from app.catalog.repository import ProductRepository
from app.domain.exceptions import (
    CartItemNotFoundError,
    CartNotFoundError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from app.domain.views import CartItemView, CartView, ProductView

logger = structlog.get_logger()

# Upper bound for a single cart line
MAX_QUANTITY = 10_000


class CartService:
    """Application service for managing shopping carts.

    The user ID comes from the identity provider and is trusted as
    given. Carts move from absent to present on the first ``get_cart``
    or ``add_item`` and are never deleted here.

    Example usage:
        async with session_factory() as session:
            service = CartService(session)
            cart = await service.add_item("user-123", product_id)
            cart = await service.update_quantity("user-123", product_id, 3)
    """

    def __init__(self, session: AsyncSession, request_id: str | None = None) -> None:
        """Initialize service.

        Args:
            session: Async SQLAlchemy session.
            request_id: Request ID for correlation.
        """
        self.session = session
        self.carts = CartRepository(session)
        self.products = ProductRepository(session)
        self.request_id = request_id

    async def get_cart(self, user_id: str) -> CartView:
        """Get the user's cart, creating an empty one if needed.

        Note that this read creates a cart row for first-time users.

        Args:
            user_id: Cart owner.

        Returns:
            Populated cart.
        """
        cart = await self._load_or_create(user_id)
        return await self._populate(cart)

    async def add_item(self, user_id: str, product_id: str) -> CartView:
        """Add one unit of a product to the user's cart.

        Creates the cart if needed. If the product is already in the
        cart its quantity goes up by one; otherwise a new line with
        quantity 1 is appended.

        Args:
            user_id: Cart owner.
            product_id: Product to add.

        Returns:
            Populated cart.

        Raises:
            ProductNotFoundError: If the product doesn't exist.
        """
        if await self.products.get_by_id(product_id) is None:
            raise ProductNotFoundError(product_id)

        cart = await self._load_or_create(user_id)
        await self.carts.increment_item(cart.id, product_id)

        logger.info(
            "Cart item added",
            cart_id=cart.id,
            user_id=user_id,
            product_id=product_id,
            request_id=self.request_id,
        )
        return await self._populate(cart)

    async def update_quantity(self, user_id: str, product_id: str, quantity: int) -> CartView:
        """Replace the quantity of a cart line.

        Stock is not checked here.

        Args:
            user_id: Cart owner.
            product_id: Product whose line to change.
            quantity: New quantity, 1 to MAX_QUANTITY.

        Returns:
            Populated cart.

        Raises:
            CartNotFoundError: If the user has no cart.
            InvalidQuantityError: If quantity is out of range.
            CartItemNotFoundError: If the product is not in the cart.
        """
        cart = await self._load(user_id)

        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        if quantity > MAX_QUANTITY:
            raise InvalidQuantityError(quantity, f"Quantity cannot exceed {MAX_QUANTITY}")

        if not await self.carts.set_item_quantity(cart.id, product_id, quantity):
            raise CartItemNotFoundError(cart.id, product_id)

        logger.info(
            "Cart item quantity updated",
            cart_id=cart.id,
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            request_id=self.request_id,
        )
        return await self._populate(cart)

    async def remove_item(self, user_id: str, product_id: str) -> CartView:
        """Remove a product's line from the cart.

        Removing a product that isn't in the cart is a no-op.

        Args:
            user_id: Cart owner.
            product_id: Product whose line to drop.

        Returns:
            Populated cart.

        Raises:
            CartNotFoundError: If the user has no cart.
        """
        cart = await self._load(user_id)
        removed = await self.carts.remove_item(cart.id, product_id)

        logger.info(
            "Cart item removed" if removed else "Cart item not present",
            cart_id=cart.id,
            user_id=user_id,
            product_id=product_id,
            request_id=self.request_id,
        )
        return await self._populate(cart)

    async def _load(self, user_id: str) -> CartModel:
        cart = await self.carts.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        return cart

    async def _load_or_create(self, user_id: str) -> CartModel:
        cart, created = await self.carts.get_or_create(user_id)
        if created:
            logger.info(
                "Cart created",
                cart_id=cart.id,
                user_id=user_id,
                request_id=self.request_id,
            )
        return cart

    async def _populate(self, cart: CartModel) -> CartView:
        """Resolve every line's product.

        Lines whose product was deleted come back with ``product=None``.
        """
        items = await self.carts.get_items(cart.id)
        products = await self.products.get_many(item.product_id for item in items)

        lines = []
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                logger.warning(
                    "Cart references missing product",
                    cart_id=cart.id,
                    product_id=item.product_id,
                )
            lines.append(
                CartItemView(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    product=ProductView.from_model(product) if product else None,
                )
            )

        cart = await self.carts.get_by_user(cart.user_id) or cart
        return CartView(
            id=cart.id,
            user_id=cart.user_id,
            items=lines,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )
