"""Catalog service for product operations.

High-level service that combines repository operations with
business logic for catalog management: shop listings, product
CRUD with reference checks, and category/color administration.
"""

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.generator import GeneratorConfig, ProductGenerator
from app.catalog.models import Category, Color, Product
from app.catalog.query import QueryBuilder
from app.catalog.repository import CategoryRepository, ColorRepository, ProductRepository
from app.catalog.resolver import SlugResolver
from app.domain.exceptions import (
    DuplicateSlugError,
    InvalidReferenceError,
    ProductNotFoundError,
    ValidationError,
)
from app.domain.value_objects import HexColor, Slug
from app.domain.views import CategoryView, ColorView, ProductView

T = TypeVar("T")

logger = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 24
MAX_PAGE_SIZE = 100

# Largest OFFSET a 64-bit database integer can hold
MAX_OFFSET = 2**63 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")


def _parse_int(raw: Any) -> int | None:
    """Parse the leading integer of a raw query value.

    Returns:
        Parsed integer, or None if the value has no leading digits.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if not match:
            return None
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        # Saturate instead of converting arbitrarily long digit runs
        value = MAX_OFFSET + 1 if len(digits) > 19 else int(digits)
        return -value if sign == "-" else value
    return None


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
    """

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def coerce(cls, page: Any = None, limit: Any = None) -> "PaginationParams":
        """Build pagination from untrusted input without rejecting it.

        Missing, zero or non-numeric values fall back to the defaults;
        the size is clamped to [1, 100] and the page kept between 1 and
        the last page whose offset the database can represent.

        Args:
            page: Raw page value.
            limit: Raw page-size value.

        Returns:
            Valid PaginationParams.
        """
        per_page = min(max(_parse_int(limit) or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)
        page_num = max(_parse_int(page) or DEFAULT_PAGE, 1)
        page_num = min(page_num, MAX_OFFSET // per_page + 1)
        return cls(page=page_num, page_size=per_page)

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
        total_pages: Total number of pages.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


@dataclass
class ProductInput:
    """Data for creating a product."""

    category_id: str
    name: str
    price: Decimal
    stock: int
    images: list[str]
    features: list[str] = field(default_factory=list)
    description: str = ""
    color_id: str | None = None


class CatalogService:
    """Service for catalog operations.

    Provides high-level operations for the product catalog including
    shop listings, product administration and seeding.

    Example usage:
        async with session_factory() as session:
            service = CatalogService(session)

            page = await service.list_shop_products(
                category_slug="shoes",
                sort="price_asc",
                page="2",
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)
        self.colors = ColorRepository(session)
        self.query_builder = QueryBuilder(SlugResolver(session))

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def list_products(
        self,
        spec: FilterSpec,
        page: Any = None,
        limit: Any = None,
    ) -> PaginatedResult[ProductView]:
        """List one page of products matching a spec.

        Count and page are both computed from ``spec``.

        Args:
            spec: Resolved filter criteria.
            page: Raw page number.
            limit: Raw page size.

        Returns:
            Paginated product views with colors resolved.
        """
        pagination = PaginationParams.coerce(page, limit)

        total = await self.products.count(spec)
        products = await self.products.find_all(
            spec,
            limit=pagination.limit,
            offset=pagination.offset,
        )

        return PaginatedResult(
            items=[ProductView.from_model(p) for p in products],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    async def list_shop_products(
        self,
        category_slug: str | None = None,
        color_slug: str | None = None,
        sort: str | None = None,
        page: Any = None,
        limit: Any = None,
        exclude_id: str | None = None,
    ) -> PaginatedResult[ProductView]:
        """Resolve shop URL criteria and list the requested page.

        Returns:
            Paginated product views; empty when the category is unknown.
        """
        spec = await self.query_builder.build(
            category_slug=category_slug,
            color_slug=color_slug,
            exclude_id=exclude_id,
            sort=sort,
        )
        return await self.list_products(spec, page=page, limit=limit)

    async def list_all_products(self, category_id: str | None = None) -> list[ProductView]:
        """List every product, newest first.

        Args:
            category_id: Optional category filter.

        Returns:
            Product views.
        """
        spec = FilterSpec(category_id=category_id, sort=SortKey.NEWEST)
        products = await self.products.find_all(spec, limit=None)
        return [ProductView.from_model(p) for p in products]

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    async def get_product(self, product_id: str) -> ProductView:
        """Get product with category and color resolved.

        Raises:
            ProductNotFoundError: If the product doesn't exist.
        """
        product = await self.products.get_by_id(product_id, include_category=True)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductView.from_model(product, include_category=True)

    async def create_product(self, data: ProductInput) -> ProductView:
        """Create a product after checking its references.

        Raises:
            ValidationError: If price or stock are out of range.
            InvalidReferenceError: If category or color don't exist.
        """
        self._validate_amounts(data.price, data.stock)
        await self._ensure_category(data.category_id)
        if data.color_id is not None:
            await self._ensure_color(data.color_id)

        product = Product(
            category_id=data.category_id,
            color_id=data.color_id,
            name=data.name,
            description=data.description,
            price=Decimal(str(data.price)),
            stock=data.stock,
            images=list(data.images),
            features=list(data.features),
        )
        await self.products.save(product)

        logger.info(
            "Product created",
            product_id=product.id,
            category_id=product.category_id,
        )
        return await self.get_product(product.id)

    async def update_product(self, product_id: str, changes: dict[str, Any]) -> ProductView:
        """Apply a partial update to a product.

        Args:
            product_id: Product to update.
            changes: Field values to set; absent fields are left alone.

        Raises:
            ProductNotFoundError: If the product doesn't exist.
            InvalidReferenceError: If a new category or color doesn't exist.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        self._validate_amounts(changes.get("price"), changes.get("stock"))

        if "category_id" in changes:
            await self._ensure_category(changes["category_id"])
        if changes.get("color_id") is not None:
            await self._ensure_color(changes["color_id"])

        for key, value in changes.items():
            if key == "price":
                value = Decimal(str(value))
            setattr(product, key, value)

        await self.session.flush()

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return await self.get_product(product_id)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Cart lines referencing the product are left dangling.

        Raises:
            ProductNotFoundError: If the product doesn't exist.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        await self.products.delete(product)
        logger.info("Product deleted", product_id=product_id)

    # -------------------------------------------------------------------------
    # Categories & Colors
    # -------------------------------------------------------------------------

    async def list_categories(self) -> list[CategoryView]:
        """Get all categories."""
        return [CategoryView.from_model(c) for c in await self.categories.list_all()]

    async def create_category(self, name: str, slug: str) -> CategoryView:
        """Create a category.

        Raises:
            InvalidSlugError: If the slug is blank.
            DuplicateSlugError: If the slug is taken.
        """
        normalized = Slug.parse(slug)
        if await self.categories.get_by_slug(normalized.value):
            raise DuplicateSlugError("Category", "slug", normalized.value)

        category = await self.categories.save(Category(name=name, slug=normalized.value))
        logger.info("Category created", category_id=category.id, slug=category.slug)
        return CategoryView.from_model(category)

    async def list_colors(self) -> list[ColorView]:
        """Get all colors."""
        return [ColorView.from_model(c) for c in await self.colors.list_all()]

    async def create_color(self, name: str, slug: str, hex: str | None = None) -> ColorView:
        """Create a color.

        Raises:
            InvalidSlugError: If the slug is blank.
            InvalidHexColorError: If the hex code is malformed.
            DuplicateSlugError: If the slug or name is taken.
        """
        normalized = Slug.parse(slug)
        hex_color = HexColor.parse(hex)

        if await self.colors.get_by_slug(normalized.value):
            raise DuplicateSlugError("Color", "slug", normalized.value)
        if await self.colors.get_by_name(name):
            raise DuplicateSlugError("Color", "name", name)

        color = await self.colors.save(
            Color(
                name=name,
                slug=normalized.value,
                hex=str(hex_color) if hex_color else None,
            )
        )
        logger.info("Color created", color_id=color.id, slug=color.slug)
        return ColorView.from_model(color)

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    async def seed_catalog(self, config: GeneratorConfig | None = None) -> dict[str, Any]:
        """Seed categories, colors and products.

        Categories and colors whose slug already exists are reused, and
        products that were seeded before are skipped.

        Args:
            config: Generator configuration (small catalog by default).

        Returns:
            Seeding result with counts.
        """
        generator = ProductGenerator(config or GeneratorConfig.small())

        categories: dict[str, Category] = {}
        for category in generator.generate_categories():
            existing = await self.categories.get_by_slug(category.slug)
            categories[category.slug] = existing or await self.categories.save(category)

        colors: dict[str, Color] = {}
        for color in generator.generate_colors():
            existing = await self.colors.get_by_slug(color.slug)
            colors[color.slug] = existing or await self.colors.save(color)

        products = generator.generate_products(categories, colors)
        existing_ids = await self.products.get_many(p.id for p in products)
        new_products = [p for p in products if p.id not in existing_ids]

        await self.products.save_all(new_products)
        await self.session.commit()

        result = {
            "categories": len(categories),
            "colors": len(colors),
            "products_created": len(new_products),
            "products_skipped": len(products) - len(new_products),
        }
        logger.info("Catalog seeded", **result)
        return result

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _validate_amounts(self, price: Any, stock: Any) -> None:
        if price is not None and Decimal(str(price)) <= 0:
            raise ValidationError("Price must be positive", details={"price": str(price)})
        if stock is not None and stock < 0:
            raise ValidationError("Stock cannot be negative", details={"stock": stock})

    async def _ensure_category(self, category_id: str | None) -> None:
        if category_id is None or await self.categories.get_by_id(category_id) is None:
            raise InvalidReferenceError("category_id", str(category_id))

    async def _ensure_color(self, color_id: str) -> None:
        if await self.colors.get_by_id(color_id) is None:
            raise InvalidReferenceError("color_id", color_id)
