"""Tests for CatalogService listings and administration."""

from decimal import Decimal

import pytest

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.generator import GeneratorConfig
from app.catalog.service import CatalogService, ProductInput
from app.domain.exceptions import (
    DuplicateSlugError,
    InvalidHexColorError,
    InvalidReferenceError,
    ProductNotFoundError,
    ValidationError,
)


@pytest.fixture
def service(session) -> CatalogService:
    """Create catalog service over the test session."""
    return CatalogService(session)


def ids(result) -> list[str]:
    """Product IDs of a listing, in order."""
    return [p.id for p in result.items]


class TestShopListing:
    """Tests for slug-based shop listings."""

    @pytest.mark.asyncio
    async def test_all_products_newest_first(self, service: CatalogService, sample_catalog) -> None:
        """Without criteria every product is listed, newest first."""
        result = await service.list_shop_products()

        assert ids(result) == ["prod-5", "prod-4", "prod-3", "prod-2", "prod-1"]
        assert result.total == 5
        assert result.page == 1
        assert result.page_size == 24
        assert result.total_pages == 1

    @pytest.mark.asyncio
    async def test_category_filter(self, service: CatalogService, sample_catalog) -> None:
        """Category slug restricts the listing, case-insensitively."""
        result = await service.list_shop_products(category_slug="SHOES")

        assert ids(result) == ["prod-4", "prod-3", "prod-2", "prod-1"]
        assert result.total == 4

    @pytest.mark.asyncio
    async def test_category_and_color_filter(self, service: CatalogService, sample_catalog) -> None:
        """Color slug narrows the category listing."""
        result = await service.list_shop_products(category_slug="shoes", color_slug="red")

        assert ids(result) == ["prod-4", "prod-1"]
        assert result.total == 2

    @pytest.mark.asyncio
    async def test_color_filter_without_category(self, service: CatalogService, sample_catalog) -> None:
        """Color filter works across categories."""
        result = await service.list_shop_products(color_slug="blue")
        assert ids(result) == ["prod-5", "prod-2"]

    @pytest.mark.asyncio
    async def test_unknown_category_yields_empty_page(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Unknown category is an empty page, not an error."""
        result = await service.list_shop_products(
            category_slug="socks", color_slug="red", page="3", limit="10"
        )

        assert result.items == []
        assert result.total == 0
        assert result.total_pages == 0
        assert result.page == 3
        assert result.page_size == 10

    @pytest.mark.asyncio
    async def test_unknown_color_is_ignored(self, service: CatalogService, sample_catalog) -> None:
        """Unknown color drops the color filter but keeps the category."""
        result = await service.list_shop_products(category_slug="shoes", color_slug="mauve")
        assert result.total == 4

    @pytest.mark.asyncio
    async def test_sort_price_asc_breaks_ties_by_id(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Equal prices are ordered by product ID."""
        result = await service.list_shop_products(category_slug="shoes", sort="price_asc")
        assert ids(result) == ["prod-2", "prod-4", "prod-1", "prod-3"]

    @pytest.mark.asyncio
    async def test_sort_price_desc(self, service: CatalogService, sample_catalog) -> None:
        """price_desc lists the most expensive first."""
        result = await service.list_shop_products(category_slug="shoes", sort="price_desc")
        assert ids(result) == ["prod-3", "prod-1", "prod-2", "prod-4"]

    @pytest.mark.asyncio
    async def test_unknown_sort_falls_back_to_newest(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Unrecognized sort keys mean newest first."""
        result = await service.list_shop_products(category_slug="shoes", sort="popular")
        assert ids(result) == ["prod-4", "prod-3", "prod-2", "prod-1"]

    @pytest.mark.asyncio
    async def test_exclude(self, service: CatalogService, sample_catalog) -> None:
        """Excluded product is left out of items and total."""
        result = await service.list_shop_products(category_slug="shoes", exclude_id="prod-4")

        assert ids(result) == ["prod-3", "prod-2", "prod-1"]
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_pagination(self, service: CatalogService, sample_catalog) -> None:
        """Pages slice the sorted listing; total is unaffected."""
        page_two = await service.list_shop_products(category_slug="shoes", page="2", limit="2")
        page_three = await service.list_shop_products(category_slug="shoes", page="3", limit="2")

        assert ids(page_two) == ["prod-2", "prod-1"]
        assert page_two.total == 4
        assert page_two.total_pages == 2
        assert page_three.items == []
        assert page_three.total == 4

    @pytest.mark.asyncio
    async def test_malformed_pagination_is_coerced(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Garbage page/limit values fall back to defaults."""
        result = await service.list_shop_products(page="abc", limit="0")

        assert result.page == 1
        assert result.page_size == 24
        assert result.total == 5

    @pytest.mark.asyncio
    async def test_page_beyond_integer_range_is_empty(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """A page too large for a database offset lists nothing."""
        result = await service.list_shop_products(page="99999999999999999999")

        assert result.items == []
        assert result.total == 5
        assert result.page >= 1

    @pytest.mark.asyncio
    async def test_products_carry_color(self, service: CatalogService, sample_catalog) -> None:
        """Listed products have their color resolved."""
        result = await service.list_shop_products(category_slug="shoes")
        by_id = {p.id: p for p in result.items}

        assert by_id["prod-4"].color is not None
        assert by_id["prod-4"].color.slug == "red"
        assert by_id["prod-4"].color.hex == "#ff0000"
        assert by_id["prod-3"].color is None
        assert by_id["prod-4"].category is None

    @pytest.mark.asyncio
    async def test_list_products_with_spec(self, service: CatalogService, sample_catalog) -> None:
        """list_products accepts a pre-built spec."""
        spec = FilterSpec(category_id=sample_catalog.hats_id, sort=SortKey.PRICE_ASC)
        result = await service.list_products(spec)
        assert ids(result) == ["prod-5"]

    @pytest.mark.asyncio
    async def test_list_all_products(self, service: CatalogService, sample_catalog) -> None:
        """Unpaginated listing, optionally per category."""
        everything = await service.list_all_products()
        hats = await service.list_all_products(category_id=sample_catalog.hats_id)

        assert len(everything) == 5
        assert [p.id for p in hats] == ["prod-5"]


class TestProductAdministration:
    """Tests for product CRUD."""

    @pytest.fixture
    def product_input(self) -> ProductInput:
        """Valid input for a new shoe."""
        return ProductInput(
            category_id="cat-shoes",
            color_id="color-blue",
            name="Northwind Trail",
            price=Decimal("89.99"),
            stock=3,
            images=["https://img.example.com/trail.jpg"],
            features=["Water resistant"],
        )

    @pytest.mark.asyncio
    async def test_get_product_includes_category(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Detail reads resolve category and color."""
        product = await service.get_product("prod-1")

        assert product.name == "Acme Runner"
        assert product.price == Decimal("50.00")
        assert product.category is not None
        assert product.category.slug == "shoes"
        assert product.color is not None
        assert product.color.slug == "red"

    @pytest.mark.asyncio
    async def test_get_missing_product(self, service: CatalogService, sample_catalog) -> None:
        """Unknown products raise ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            await service.get_product("nope")

    @pytest.mark.asyncio
    async def test_create_product(
        self, service: CatalogService, sample_catalog, product_input: ProductInput
    ) -> None:
        """Created products are listed with their references resolved."""
        product = await service.create_product(product_input)

        assert product.id
        assert product.description == ""
        assert product.color is not None and product.color.slug == "blue"
        assert product.category is not None and product.category.slug == "shoes"

        listing = await service.list_shop_products(category_slug="shoes", color_slug="blue")
        assert product.id in ids(listing)

    @pytest.mark.asyncio
    async def test_create_with_unknown_category(
        self, service: CatalogService, sample_catalog, product_input: ProductInput
    ) -> None:
        """Unknown category is an invalid reference."""
        product_input.category_id = "cat-socks"
        with pytest.raises(InvalidReferenceError) as exc_info:
            await service.create_product(product_input)
        assert exc_info.value.details == {"category_id": "cat-socks"}

    @pytest.mark.asyncio
    async def test_create_with_unknown_color(
        self, service: CatalogService, sample_catalog, product_input: ProductInput
    ) -> None:
        """Unknown color is an invalid reference."""
        product_input.color_id = "color-mauve"
        with pytest.raises(InvalidReferenceError):
            await service.create_product(product_input)

    @pytest.mark.asyncio
    async def test_create_with_non_positive_price(
        self, service: CatalogService, sample_catalog, product_input: ProductInput
    ) -> None:
        """Price must be positive."""
        product_input.price = Decimal("0")
        with pytest.raises(ValidationError):
            await service.create_product(product_input)

    @pytest.mark.asyncio
    async def test_update_product(self, service: CatalogService, sample_catalog) -> None:
        """Only the given fields change."""
        product = await service.update_product("prod-1", {"name": "Acme Racer", "price": "55.5"})

        assert product.name == "Acme Racer"
        assert product.price == Decimal("55.50")
        assert product.stock == 10
        assert product.color is not None and product.color.slug == "red"

    @pytest.mark.asyncio
    async def test_update_clears_color(self, service: CatalogService, sample_catalog) -> None:
        """color_id may be set to None."""
        product = await service.update_product("prod-1", {"color_id": None})

        assert product.color_id is None
        assert product.color is None

    @pytest.mark.asyncio
    async def test_update_with_unknown_category(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Moving to an unknown category is rejected."""
        with pytest.raises(InvalidReferenceError):
            await service.update_product("prod-1", {"category_id": "cat-socks"})

    @pytest.mark.asyncio
    async def test_update_missing_product(self, service: CatalogService, sample_catalog) -> None:
        """Updating an unknown product raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            await service.update_product("nope", {"name": "x"})

    @pytest.mark.asyncio
    async def test_delete_product(self, service: CatalogService, sample_catalog) -> None:
        """Deleted products are gone from detail reads and listings."""
        await service.delete_product("prod-5")

        with pytest.raises(ProductNotFoundError):
            await service.get_product("prod-5")
        listing = await service.list_shop_products()
        assert "prod-5" not in ids(listing)

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, service: CatalogService, sample_catalog) -> None:
        """Deleting an unknown product raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            await service.delete_product("nope")


class TestCategoriesAndColors:
    """Tests for category and color administration."""

    @pytest.mark.asyncio
    async def test_create_category_normalizes_slug(
        self, service: CatalogService, sample_catalog
    ) -> None:
        """Category slugs are stored lower-cased and trimmed."""
        category = await service.create_category("Socks", " Socks ")

        assert category.slug == "socks"
        assert [c.slug for c in await service.list_categories()] == ["hats", "shoes", "socks"]

    @pytest.mark.asyncio
    async def test_duplicate_category_slug(self, service: CatalogService, sample_catalog) -> None:
        """Category slugs are unique regardless of case."""
        with pytest.raises(DuplicateSlugError):
            await service.create_category("More Shoes", "SHOES")

    @pytest.mark.asyncio
    async def test_create_color(self, service: CatalogService, sample_catalog) -> None:
        """Colors are created with a validated hex code."""
        color = await service.create_color("Green", "green", "#388E3C")

        assert color.slug == "green"
        assert color.hex == "#388E3C"
        assert [c.name for c in await service.list_colors()] == ["Blue", "Green", "Red"]

    @pytest.mark.asyncio
    async def test_create_color_without_hex(self, service: CatalogService, sample_catalog) -> None:
        """Hex code is optional."""
        color = await service.create_color("Plain", "plain")
        assert color.hex is None

    @pytest.mark.asyncio
    async def test_invalid_hex(self, service: CatalogService, sample_catalog) -> None:
        """Malformed hex codes are rejected."""
        with pytest.raises(InvalidHexColorError):
            await service.create_color("Green", "green", "388e3c")

    @pytest.mark.asyncio
    async def test_duplicate_color_name(self, service: CatalogService, sample_catalog) -> None:
        """Color names are unique too."""
        with pytest.raises(DuplicateSlugError):
            await service.create_color("Red", "crimson")

    @pytest.mark.asyncio
    async def test_duplicate_color_slug(self, service: CatalogService, sample_catalog) -> None:
        """Color slugs are unique."""
        with pytest.raises(DuplicateSlugError):
            await service.create_color("Crimson", "RED")


class TestSeeding:
    """Tests for catalog seeding."""

    @pytest.mark.asyncio
    async def test_seed_empty_database(self, service: CatalogService) -> None:
        """Seeding creates categories, colors and products."""
        config = GeneratorConfig(products_per_category=2)
        result = await service.seed_catalog(config)

        assert result["categories"] == len(config.categories)
        assert result["colors"] == len(config.colors)
        assert result["products_created"] == 2 * len(config.categories)
        assert result["products_skipped"] == 0

        listing = await service.list_shop_products(category_slug="hats")
        assert listing.total == 2

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, service: CatalogService) -> None:
        """A second run with the same config adds nothing."""
        config = GeneratorConfig(products_per_category=2)
        await service.seed_catalog(config)
        result = await service.seed_catalog(config)

        assert result["products_created"] == 0
        assert result["products_skipped"] == 2 * len(config.categories)

    @pytest.mark.asyncio
    async def test_seed_reuses_existing_slugs(self, service: CatalogService, sample_catalog) -> None:
        """Existing categories and colors are reused by slug."""
        await service.seed_catalog(GeneratorConfig(products_per_category=1))

        shoes = await service.list_shop_products(category_slug="shoes")
        assert shoes.total == 5
        slugs = [c.slug for c in await service.list_categories()]
        assert slugs.count("shoes") == 1
