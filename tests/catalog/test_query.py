"""Tests for slug resolution and query building."""

import pytest

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.query import QueryBuilder
from app.catalog.resolver import SlugKind, SlugResolver


class TestSortKey:
    """Tests for sort parameter mapping."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("price_asc", SortKey.PRICE_ASC),
            ("price_desc", SortKey.PRICE_DESC),
            ("newest", SortKey.NEWEST),
            (None, SortKey.NEWEST),
            ("", SortKey.NEWEST),
            ("PRICE_ASC", SortKey.NEWEST),
            ("rating", SortKey.NEWEST),
        ],
    )
    def test_parse(self, raw: str | None, expected: SortKey) -> None:
        """Only the two price keys are recognized."""
        assert SortKey.parse(raw) is expected


class TestFilterSpec:
    """Tests for FilterSpec."""

    def test_default_spec_matches_everything(self) -> None:
        """A bare spec has no filters and sorts newest first."""
        spec = FilterSpec()
        assert spec.category_id is None
        assert spec.sort is SortKey.NEWEST
        assert not spec.matches_nothing

    def test_empty_keeps_sort(self) -> None:
        """An empty spec still carries the requested sort."""
        spec = FilterSpec.empty(sort=SortKey.PRICE_DESC)
        assert spec.matches_nothing
        assert spec.sort is SortKey.PRICE_DESC


class TestSlugResolver:
    """Tests for SlugResolver."""

    @pytest.mark.asyncio
    async def test_resolves_category(self, session, sample_catalog) -> None:
        """Known category slugs resolve to the category ID."""
        resolver = SlugResolver(session)
        assert await resolver.resolve(SlugKind.CATEGORY, "shoes") == sample_catalog.shoes_id

    @pytest.mark.asyncio
    async def test_normalizes_before_lookup(self, session, sample_catalog) -> None:
        """Slugs are trimmed and lower-cased."""
        resolver = SlugResolver(session)
        assert await resolver.resolve(SlugKind.COLOR, "  RED ") == sample_catalog.red_id

    @pytest.mark.asyncio
    async def test_unknown_slug_returns_none(self, session, sample_catalog) -> None:
        """A miss is reported as None, not raised."""
        resolver = SlugResolver(session)
        assert await resolver.resolve(SlugKind.CATEGORY, "socks") is None
        assert await resolver.resolve(SlugKind.COLOR, "") is None

    @pytest.mark.asyncio
    async def test_kinds_are_separate(self, session, sample_catalog) -> None:
        """A color slug doesn't resolve as a category."""
        resolver = SlugResolver(session)
        assert await resolver.resolve(SlugKind.CATEGORY, "red") is None


class TestQueryBuilder:
    """Tests for QueryBuilder."""

    @pytest.fixture
    def builder(self, session) -> QueryBuilder:
        """Create builder over the test session."""
        return QueryBuilder(SlugResolver(session))

    @pytest.mark.asyncio
    async def test_no_criteria(self, builder: QueryBuilder, sample_catalog) -> None:
        """No criteria yields an unfiltered newest-first spec."""
        assert await builder.build() == FilterSpec()

    @pytest.mark.asyncio
    async def test_resolves_all_criteria(self, builder: QueryBuilder, sample_catalog) -> None:
        """Slugs are resolved and exclusion and sort are carried over."""
        spec = await builder.build(
            category_slug="Shoes",
            color_slug="red",
            exclude_id="prod-1",
            sort="price_desc",
        )
        assert spec == FilterSpec(
            category_id=sample_catalog.shoes_id,
            color_id=sample_catalog.red_id,
            exclude_id="prod-1",
            sort=SortKey.PRICE_DESC,
        )

    @pytest.mark.asyncio
    async def test_unknown_category_matches_nothing(
        self, builder: QueryBuilder, sample_catalog
    ) -> None:
        """An unknown category short-circuits to an empty spec."""
        spec = await builder.build(category_slug="socks", color_slug="red")
        assert spec.matches_nothing

    @pytest.mark.asyncio
    async def test_unknown_color_is_dropped(self, builder: QueryBuilder, sample_catalog) -> None:
        """An unknown color leaves the rest of the query intact."""
        spec = await builder.build(category_slug="shoes", color_slug="mauve")
        assert not spec.matches_nothing
        assert spec.category_id == sample_catalog.shoes_id
        assert spec.color_id is None
