"""Product Catalog Service.

Provides slug resolution, product query building, paginated shop
listings, product administration and deterministic catalog seeding.
"""

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.generator import GeneratorConfig, ProductGenerator
from app.catalog.models import Category, Color, Product
from app.catalog.query import QueryBuilder
from app.catalog.repository import CategoryRepository, ColorRepository, ProductRepository
from app.catalog.resolver import SlugKind, SlugResolver
from app.catalog.service import (
    CatalogService,
    PaginatedResult,
    PaginationParams,
    ProductInput,
)

__all__ = [
    # Models
    "Category",
    "Color",
    "Product",
    # Generator
    "GeneratorConfig",
    "ProductGenerator",
    # Repositories
    "CategoryRepository",
    "ColorRepository",
    "ProductRepository",
    # Query building
    "FilterSpec",
    "QueryBuilder",
    "SlugKind",
    "SlugResolver",
    "SortKey",
    # Service
    "CatalogService",
    "PaginatedResult",
    "PaginationParams",
    "ProductInput",
]
