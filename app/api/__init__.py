"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from app.api.cart import router as cart_router
from app.api.categories import router as categories_router
from app.api.colors import router as colors_router
from app.api.health import router as health_router
from app.api.products import router as products_router

__all__ = [
    "cart_router",
    "categories_router",
    "colors_router",
    "health_router",
    "products_router",
]
