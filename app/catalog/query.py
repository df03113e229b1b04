"""Query builder for shop product listings.

Turns slugs from the shop URL into a ``FilterSpec``. The two slug
kinds degrade differently when unknown:

- unknown category: the filter matches nothing (empty page);
- unknown color: the color filter is dropped and the query proceeds.
"""

from app.catalog.filters import FilterSpec, SortKey
from app.catalog.resolver import SlugKind, SlugResolver


class QueryBuilder:
    """Composes filter, exclusion and sort criteria into a FilterSpec."""

    def __init__(self, resolver: SlugResolver) -> None:
        self.resolver = resolver

    async def build(
        self,
        category_slug: str | None = None,
        color_slug: str | None = None,
        exclude_id: str | None = None,
        sort: str | None = None,
    ) -> FilterSpec:
        """Build a filter spec.

        Args:
            category_slug: Category slug from the URL.
            color_slug: Color slug from the query string.
            exclude_id: Product ID to leave out.
            sort: Raw sort key (``price_asc``, ``price_desc``, other).

        Returns:
            FilterSpec ready for the product repository.
        """
        sort_key = SortKey.parse(sort)

        category_id = None
        if category_slug:
            category_id = await self.resolver.resolve(SlugKind.CATEGORY, category_slug)
            if category_id is None:
                return FilterSpec.empty(sort=sort_key)

        color_id = None
        if color_slug:
            color_id = await self.resolver.resolve(SlugKind.COLOR, color_slug)

        return FilterSpec(
            category_id=category_id,
            color_id=color_id,
            exclude_id=exclude_id or None,
            sort=sort_key,
        )
