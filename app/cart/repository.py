"""Cart repository for database operations.

Every mutation is a single conditional statement executed by the
database, never a load-modify-save cycle in Python, so concurrent
requests against the same cart cannot overwrite each other:

- cart creation: ``INSERT ... ON CONFLICT (user_id) DO NOTHING``
- add item: ``INSERT ... ON CONFLICT (cart_id, product_id) DO UPDATE
  SET quantity = cart_items.quantity + 1``
- set quantity / remove: ``UPDATE`` / ``DELETE`` filtered by
  ``(cart_id, product_id)``; the affected row count reports a miss.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.cart.models import CartItemModel, CartModel

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UnsupportedDialectError(RuntimeError):
    """Raised when the configured database can't run cart upserts."""


def check_upsert_support(dialect_name: str) -> None:
    """Fail fast if a database dialect lacks ON CONFLICT support.

    Args:
        dialect_name: SQLAlchemy dialect name, e.g. ``engine.dialect.name``.

    Raises:
        UnsupportedDialectError: If the dialect is not supported.
    """
    if dialect_name not in _INSERT_BY_DIALECT:
        supported = ", ".join(sorted(_INSERT_BY_DIALECT))
        raise UnsupportedDialectError(
            f"Cart storage needs one of [{supported}], got '{dialect_name}'"
        )


class CartRepository:
    """Repository for Cart database operations.

    Example usage:
        async with session_factory() as session:
            repo = CartRepository(session)
            cart = await repo.get_or_create("user-123")
            await repo.increment_item(cart.id, product_id)
            items = await repo.get_items(cart.id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    def _insert(self, table: Any) -> Any:
        """Get a dialect insert construct that supports ON CONFLICT."""
        dialect = self.session.get_bind().dialect.name
        check_upsert_support(dialect)
        return _INSERT_BY_DIALECT[dialect](table)

    async def get_by_user(self, user_id: str) -> CartModel | None:
        """Get a user's cart.

        Args:
            user_id: Cart owner.

        Returns:
            CartModel if the user has a cart, None otherwise.
        """
        result = await self.session.execute(
            select(CartModel)
            .where(CartModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, user_id: str) -> tuple[CartModel, bool]:
        """Get a user's cart, creating it if needed.

        Two concurrent callers for the same user end up with the same cart.

        Args:
            user_id: Cart owner.

        Returns:
            Tuple of (cart, created).
        """
        cart = await self.get_by_user(user_id)
        if cart is not None:
            return cart, False

        now = datetime.now(timezone.utc)
        stmt = (
            self._insert(CartModel)
            .values(id=str(uuid4()), user_id=user_id, created_at=now, updated_at=now)
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        result = await self.session.execute(stmt)
        created = result.rowcount == 1

        cart = await self.get_by_user(user_id)
        if cart is None:
            raise RuntimeError(f"Cart for user {user_id} vanished after insert")
        return cart, created

    async def get_items(self, cart_id: str) -> Sequence[CartItemModel]:
        """Get cart lines in insertion order."""
        result = await self.session.execute(
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def increment_item(self, cart_id: str, product_id: str, amount: int = 1) -> None:
        """Add units of a product, creating the line if it doesn't exist.

        Args:
            cart_id: Cart to modify.
            product_id: Product to add.
            amount: Units to add.
        """
        stmt = self._insert(CartItemModel).values(
            cart_id=cart_id,
            product_id=product_id,
            quantity=amount,
            added_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id"],
            set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
        )
        await self.session.execute(stmt)
        await self._touch(cart_id)

    async def set_item_quantity(self, cart_id: str, product_id: str, quantity: int) -> bool:
        """Replace the quantity of an existing line.

        Returns:
            True if the line existed and was updated.
        """
        result = await self.session.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False
        await self._touch(cart_id)
        return True

    async def remove_item(self, cart_id: str, product_id: str) -> bool:
        """Delete a line if present.

        Returns:
            True if a line was deleted.
        """
        result = await self.session.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False
        await self._touch(cart_id)
        return True

    async def _touch(self, cart_id: str) -> None:
        await self.session.execute(
            update(CartModel)
            .where(CartModel.id == cart_id)
            .values(updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
