"""SQLAlchemy models for shopping carts.

Each user owns at most one cart. Cart lines are stored as rows keyed by
``(cart_id, product_id)`` so a product can appear only once per cart and
quantity changes are single-row updates.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CartModel(Base):
    """Cart owned by a single user.

    Attributes:
        id: Unique cart identifier (UUID string).
        user_id: Owning user; unique.
        created_at: Creation timestamp.
        updated_at: Last mutation timestamp.
    """

    __tablename__ = "carts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Cart(id={self.id}, user_id={self.user_id})>"


class CartItemModel(Base):
    """One line of a cart.

    ``product_id`` is not a foreign key: deleting a product
    leaves the line in place and readers see a missing product.

    Attributes:
        id: Surrogate key; insertion order of lines.
        cart_id: Parent cart.
        product_id: Referenced product.
        quantity: Number of units.
        added_at: Timestamp when the line was created.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cart_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str] = mapped_column(String(36), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CartItem(cart_id={self.cart_id}, product_id={self.product_id}, quantity={self.quantity})>"
