"""Catalog repositories for database operations.

Provides lookups and CRUD for categories, colors and products, plus
filtered, sorted and paginated product queries.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.models import Category, Color, Product


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Save a category to database."""
        self.session.add(category)
        await self.session.flush()
        return category

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get category by ID."""
        return await self.session.get(Category, category_id)

    async def get_by_slug(self, slug: str) -> Category | None:
        """Get category by its (already normalized) slug."""
        result = await self.session.execute(
            select(Category).where(Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Category]:
        """List all categories ordered by name."""
        result = await self.session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()


class ColorRepository:
    """Repository for Color database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, color: Color) -> Color:
        """Save a color to database."""
        self.session.add(color)
        await self.session.flush()
        return color

    async def get_by_id(self, color_id: str) -> Color | None:
        """Get color by ID."""
        return await self.session.get(Color, color_id)

    async def get_by_slug(self, slug: str) -> Color | None:
        """Get color by its (already normalized) slug."""
        result = await self.session.execute(select(Color).where(Color.slug == slug))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Color | None:
        """Get color by exact name."""
        result = await self.session.execute(select(Color).where(Color.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Color]:
        """List all colors ordered by name."""
        result = await self.session.execute(select(Color).order_by(Color.name))
        return result.scalars().all()


class ProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering, sorting, and pagination. Every query eagerly loads the
    product's color so callers can build read models without further
    round trips.

    Example usage:
        async with session_factory() as session:
            repo = ProductRepository(session)
            spec = FilterSpec(category_id=category.id, sort=SortKey.PRICE_ASC)
            total = await repo.count(spec)
            products = await repo.find_all(spec, limit=24, offset=0)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def save_all(self, products: list[Product]) -> list[Product]:
        """Save multiple products to database."""
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def delete(self, product: Product) -> None:
        """Delete a product.

        Cart lines referencing the product are not touched.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def get_by_id(
        self,
        product_id: str,
        include_category: bool = False,
    ) -> Product | None:
        """Get product by ID with its color loaded.

        Args:
            product_id: Product ID.
            include_category: Whether to eagerly load the category too.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.color))
            .execution_options(populate_existing=True)
        )

        if include_category:
            query = query.options(selectinload(Product.category))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Get products by ID.

        Args:
            product_ids: IDs to fetch; unknown IDs are skipped.

        Returns:
            Mapping of product ID to product.
        """
        ids = list(set(product_ids))
        if not ids:
            return {}

        result = await self.session.execute(
            select(Product)
            .where(Product.id.in_(ids))
            .options(selectinload(Product.color))
        )
        return {product.id: product for product in result.scalars().all()}

    async def find_all(
        self,
        spec: FilterSpec,
        limit: int | None = 24,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            spec: Resolved filter and sort criteria.
            limit: Maximum results (None for no limit).
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products.
        """
        if spec.matches_nothing:
            return []

        query = select(Product).options(selectinload(Product.color))

        conditions = self._build_conditions(spec)
        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(*self._get_order_by(spec.sort))
        query = query.limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, spec: FilterSpec) -> int:
        """Count products matching a spec.

        Args:
            spec: Resolved filter criteria (sort is ignored).

        Returns:
            Count of matching products.
        """
        if spec.matches_nothing:
            return 0

        query = select(func.count(Product.id))

        conditions = self._build_conditions(spec)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    def _build_conditions(self, spec: FilterSpec) -> list[Any]:
        """Translate a spec into SQLAlchemy filter conditions."""
        conditions = []

        if spec.category_id is not None:
            conditions.append(Product.category_id == spec.category_id)

        if spec.color_id is not None:
            conditions.append(Product.color_id == spec.color_id)

        if spec.exclude_id is not None:
            conditions.append(Product.id != spec.exclude_id)

        return conditions

    def _get_order_by(self, sort: SortKey) -> tuple[Any, ...]:
        """Get ORDER BY clauses for a sort key.

        Product ID is the final tie-breaker so page boundaries are stable.
        """
        columns = {
            SortKey.PRICE_ASC: (Product.price.asc(), Product.id.asc()),
            SortKey.PRICE_DESC: (Product.price.desc(), Product.id.asc()),
            SortKey.NEWEST: (Product.created_at.desc(), Product.id.asc()),
        }
        return columns.get(sort, columns[SortKey.NEWEST])
