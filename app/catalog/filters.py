"""Filter and sort specifications for product queries.

A ``FilterSpec`` is the resolved, store-ready form of the shop's
category/color/exclusion criteria plus the chosen sort order.
"""

from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    """Supported product orderings."""

    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"

    @classmethod
    def parse(cls, raw: str | None) -> "SortKey":
        """Map a raw sort parameter onto a sort key.

        Only ``price_asc`` and ``price_desc`` are recognized; anything
        else, including None, means newest first.

        Args:
            raw: Sort value from the query string.

        Returns:
            Matching SortKey.
        """
        if raw == cls.PRICE_ASC.value:
            return cls.PRICE_ASC
        if raw == cls.PRICE_DESC.value:
            return cls.PRICE_DESC
        return cls.NEWEST


@dataclass(frozen=True)
class FilterSpec:
    """Resolved product query criteria.

    Attributes:
        category_id: Restrict to one category.
        color_id: Restrict to one color.
        exclude_id: Leave one product out (related-products views).
        sort: Result ordering.
        matches_nothing: The requested category does not exist, so the
            query has no results by definition.
    """

    category_id: str | None = None
    color_id: str | None = None
    exclude_id: str | None = None
    sort: SortKey = SortKey.NEWEST
    matches_nothing: bool = False

    @classmethod
    def empty(cls, sort: SortKey = SortKey.NEWEST) -> "FilterSpec":
        """Spec that matches no product."""
        return cls(sort=sort, matches_nothing=True)
