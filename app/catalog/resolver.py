"""Slug resolution for categories and colors."""

from enum import Enum

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.repository import CategoryRepository, ColorRepository
from app.domain.value_objects import Slug

logger = structlog.get_logger()


class SlugKind(str, Enum):
    """Collections addressable by slug."""

    CATEGORY = "category"
    COLOR = "color"


class SlugResolver:
    """Maps human-readable slugs to internal identifiers.

    A miss is a normal outcome and is reported as ``None``; callers
    decide what an unknown slug means for them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.categories = CategoryRepository(session)
        self.colors = ColorRepository(session)

    async def resolve(self, kind: SlugKind, slug: str) -> str | None:
        """Resolve a slug to an entity ID.

        The slug is trimmed and lower-cased before lookup.

        Args:
            kind: Which collection to search.
            slug: Raw slug.

        Returns:
            Entity ID, or None if nothing matches.
        """
        normalized = Slug.normalize(slug)
        if not normalized:
            return None

        if kind is SlugKind.CATEGORY:
            entity = await self.categories.get_by_slug(normalized)
        else:
            entity = await self.colors.get_by_slug(normalized)

        if entity is None:
            logger.debug("Slug not resolved", kind=kind.value, slug=normalized)
            return None

        return entity.id
