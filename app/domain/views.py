"""Read models returned by the catalog and cart services.

Stored records keep references as identifiers; these views carry the
referenced records already resolved, so API consumers never see a bare
reference. They are built from ORM rows after the primary fetch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ColorView:
    """Color as exposed to clients."""

    id: str
    name: str
    slug: str
    hex: str | None = None

    @classmethod
    def from_model(cls, color: Any) -> "ColorView":
        return cls(id=color.id, name=color.name, slug=color.slug, hex=color.hex)


@dataclass(frozen=True)
class CategoryView:
    """Category as exposed to clients."""

    id: str
    name: str
    slug: str

    @classmethod
    def from_model(cls, category: Any) -> "CategoryView":
        return cls(id=category.id, name=category.name, slug=category.slug)


@dataclass(frozen=True)
class ProductView:
    """Product with its color (and optionally category) resolved.

    Attributes:
        color: Resolved color, None when the product has no color.
        category: Resolved category; only populated on detail reads.
    """

    id: str
    category_id: str
    color_id: str | None
    name: str
    description: str
    price: Decimal
    stock: int
    images: list[str]
    features: list[str]
    created_at: datetime
    updated_at: datetime
    color: ColorView | None = None
    category: CategoryView | None = None

    @classmethod
    def from_model(cls, product: Any, include_category: bool = False) -> "ProductView":
        """Build view from a Product row with relationships loaded.

        Args:
            product: Product ORM instance.
            include_category: Whether to resolve the category too.

        Returns:
            ProductView instance.
        """
        return cls(
            id=product.id,
            category_id=product.category_id,
            color_id=product.color_id,
            name=product.name,
            description=product.description or "",
            price=Decimal(product.price),
            stock=product.stock,
            images=list(product.images or []),
            features=list(product.features or []),
            created_at=product.created_at,
            updated_at=product.updated_at,
            color=ColorView.from_model(product.color) if product.color else None,
            category=(
                CategoryView.from_model(product.category)
                if include_category and product.category
                else None
            ),
        )


@dataclass(frozen=True)
class CartItemView:
    """A cart line with its product populated.

    ``product`` is None when the referenced product no longer exists.
    """

    product_id: str
    quantity: int
    product: ProductView | None = None


@dataclass(frozen=True)
class CartView:
    """A user's cart with every line populated."""

    id: str
    user_id: str
    items: list[CartItemView] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
