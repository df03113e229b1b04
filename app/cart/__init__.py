"""Shopping cart module.

Per-user carts with atomic item merge, quantity updates and removal.
"""

from app.cart.models import CartItemModel, CartModel
from app.cart.repository import CartRepository
from app.cart.service import CartService

__all__ = [
    "CartItemModel",
    "CartModel",
    "CartRepository",
    "CartService",
]
