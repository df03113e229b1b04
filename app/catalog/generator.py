"""Product catalog generator with deterministic seeding.

Generates a realistic storefront catalog (categories, colors and
products) from synthetic data. Uses seeded random for reproducibility.
"""

import hashlib
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator
from uuid import UUID

from app.catalog.models import Category, Color, Product


# ============================================================================
# Constants
# ============================================================================

# Synthetic brand names (fictional companies)
BRANDS = [
    "Acme",
    "Contoso",
    "Northwind",
    "Fabrikam",
    "Tailwind",
    "Globex",
    "Initech",
    "Umbrella",
]

# (name, slug)
CATEGORIES = [
    ("Shoes", "shoes"),
    ("Hats", "hats"),
    ("Shirts", "shirts"),
    ("Pants", "pants"),
    ("Bags", "bags"),
    ("Accessories", "accessories"),
]

# (name, slug, hex)
COLORS = [
    ("Black", "black", "#000000"),
    ("White", "white", "#ffffff"),
    ("Red", "red", "#d32f2f"),
    ("Blue", "blue", "#1976d2"),
    ("Green", "green", "#388e3c"),
    ("Navy", "navy", "#1a237e"),
    ("Gray", "gray", "#9e9e9e"),
]

# Price ranges by category slug (in cents)
PRICE_RANGES: dict[str, tuple[int, int]] = {
    "shoes": (4999, 39999),
    "hats": (999, 7999),
    "shirts": (1999, 9999),
    "pants": (2999, 14999),
    "bags": (3999, 49999),
    "accessories": (499, 9999),
    "default": (999, 9999),
}

# Product name templates by category slug
PRODUCT_TEMPLATES: dict[str, list[str]] = {
    "shoes": [
        "{brand} {adj} Sneakers",
        "{brand} Running {adj}",
        "{brand} {adj} Boots",
    ],
    "hats": [
        "{brand} {adj} Cap",
        "{brand} Wool {adj} Beanie",
        "{brand} {adj} Bucket Hat",
    ],
    "shirts": [
        "{brand} {adj} T-Shirt",
        "{brand} Cotton {adj} Shirt",
        "{brand} {adj} Polo",
    ],
    "pants": [
        "{brand} {adj} Jeans",
        "{brand} Casual {adj} Pants",
        "{brand} {adj} Chinos",
    ],
    "bags": [
        "{brand} {adj} Backpack",
        "{brand} {adj} Tote",
        "{brand} Travel {adj} Duffel",
    ],
    "default": [
        "{brand} {adj} Product",
        "{brand} Premium {adj}",
        "{brand} {adj} Essential",
    ],
}

FEATURES = [
    "Free returns",
    "Machine washable",
    "Recycled materials",
    "Water resistant",
    "Lifetime warranty",
    "Lightweight",
    "Breathable",
]

# Adjectives for product names
ADJECTIVES = [
    "Premium", "Elite", "Pro", "Ultra", "Classic", "Essential",
    "Smart", "Flex", "Prime", "Apex", "Core", "Nova",
]

# Timestamp of the oldest generated product
BASE_CREATED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        color_ratio: Share of products that get a color.
        categories: (name, slug) pairs to generate.
        colors: (name, slug, hex) triples to generate.
    """

    seed: int = 42
    products_per_category: int = 10
    color_ratio: float = 0.8
    categories: list[tuple[str, str]] = field(default_factory=lambda: list(CATEGORIES))
    colors: list[tuple[str, str, str]] = field(default_factory=lambda: list(COLORS))

    @classmethod
    def small(cls) -> "GeneratorConfig":
        """Create config for small catalog (~30 products)."""
        return cls(seed=42, products_per_category=5)

    @classmethod
    def full(cls) -> "GeneratorConfig":
        """Create config for full catalog (~300 products)."""
        return cls(seed=42, products_per_category=50)


# ============================================================================
# Product Generator
# ============================================================================


class ProductGenerator:
    """Generates storefront catalogs with deterministic seeding.

    The same config always yields the same categories, colors and
    products, including product IDs and creation timestamps, so
    re-seeding is idempotent.

    Example usage:
        generator = ProductGenerator(GeneratorConfig.small())
        categories = {c.slug: c for c in generator.generate_categories()}
        colors = {c.slug: c for c in generator.generate_colors()}
        for product in generator.generate(categories, colors):
            print(product.name)
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config

    def _deterministic_seed(self, *args: str | int) -> int:
        """Create deterministic seed from arguments.

        Args:
            args: Values to include in seed.

        Returns:
            Deterministic integer seed.
        """
        data = "|".join(str(a) for a in args)
        hash_bytes = hashlib.md5(data.encode()).digest()
        return int.from_bytes(hash_bytes[:4], "big")

    def _deterministic_id(self, *args: str | int) -> str:
        """Create a UUID string derived from arguments."""
        data = "|".join(str(a) for a in args)
        return str(UUID(hashlib.md5(data.encode()).hexdigest()))

    def _generate_image_url(self, product_id: str, index: int) -> str:
        """Generate placeholder image URL."""
        seed = self._deterministic_seed(product_id, index)
        return f"https://picsum.photos/seed/{seed}/600/600"

    def generate_categories(self) -> list[Category]:
        """Generate category rows."""
        return [
            Category(
                id=self._deterministic_id("category", slug),
                name=name,
                slug=slug,
            )
            for name, slug in self.config.categories
        ]

    def generate_colors(self) -> list[Color]:
        """Generate color rows."""
        return [
            Color(
                id=self._deterministic_id("color", slug),
                name=name,
                slug=slug,
                hex=hex,
            )
            for name, slug, hex in self.config.colors
        ]

    def _generate_product(
        self,
        category: Category,
        colors: list[Color],
        index: int,
        position: int,
    ) -> Product:
        """Generate a single product.

        Args:
            category: Product category.
            colors: Colors to pick from.
            index: Product index within category.
            position: Global product index, used for creation time.

        Returns:
            Generated Product.
        """
        # Seed RNG for this specific product
        rng = random.Random(self._deterministic_seed(self.config.seed, category.slug, index))

        brand = rng.choice(BRANDS)
        templates = PRODUCT_TEMPLATES.get(category.slug, PRODUCT_TEMPLATES["default"])
        adj = rng.choice(ADJECTIVES)
        name = rng.choice(templates).format(brand=brand, adj=adj)

        # Round to .99
        min_price, max_price = PRICE_RANGES.get(category.slug, PRICE_RANGES["default"])
        cents = (rng.randint(min_price, max_price) // 100) * 100 + 99

        color = None
        if colors and rng.random() < self.config.color_ratio:
            color = rng.choice(colors)

        product_id = self._deterministic_id(self.config.seed, "product", category.slug, index)
        created_at = BASE_CREATED_AT + timedelta(minutes=position)

        return Product(
            id=product_id,
            category_id=category.id,
            color_id=color.id if color else None,
            name=name,
            description=f"{adj} {category.name.lower()} from {brand}.",
            price=Decimal(cents) / 100,
            stock=rng.randint(0, 200),
            images=[self._generate_image_url(product_id, i) for i in range(rng.randint(1, 3))],
            features=rng.sample(FEATURES, rng.randint(0, 3)),
            created_at=created_at,
            updated_at=created_at,
        )

    def generate(
        self,
        categories: dict[str, Category],
        colors: dict[str, Color],
    ) -> Iterator[Product]:
        """Generate all products.

        Args:
            categories: Persisted categories by slug.
            colors: Persisted colors by slug.

        Yields:
            Generated Product instances.
        """
        color_list = [colors[slug] for slug in sorted(colors)]
        position = 0

        for slug in sorted(categories):
            for i in range(self.config.products_per_category):
                yield self._generate_product(categories[slug], color_list, i, position)
                position += 1

    def generate_products(
        self,
        categories: dict[str, Category],
        colors: dict[str, Color],
    ) -> list[Product]:
        """Generate all products as a list."""
        return list(self.generate(categories, colors))

    @property
    def expected_count(self) -> int:
        """Get expected number of products."""
        return len(self.config.categories) * self.config.products_per_category
