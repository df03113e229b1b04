"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

import re
from dataclasses import dataclass
from typing import Self

from app.domain.base import ValueObject
from app.domain.exceptions import InvalidHexColorError, InvalidSlugError

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


# ============================================================================
# Slug
# ============================================================================


@dataclass(frozen=True)
class Slug(ValueObject):
    """Normalized, lowercase, human-readable identifier.

    Lookups by slug are case- and whitespace-insensitive: every slug
    is trimmed and lower-cased before it is stored or compared.
    """

    value: str

    @staticmethod
    def normalize(raw: str) -> str:
        """Trim and lower-case a raw slug.

        Args:
            raw: Slug as received from a URL or payload.

        Returns:
            Normalized slug text (may be empty).
        """
        return raw.strip().lower()

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Create a Slug from raw input.

        Raises:
            InvalidSlugError: If nothing is left after normalization.
        """
        value = cls.normalize(raw)
        if not value:
            raise InvalidSlugError(raw)
        return cls(value=value)

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Hex Color
# ============================================================================


@dataclass(frozen=True)
class HexColor(ValueObject):
    """CSS-style hex color code (``#RGB`` or ``#RRGGBB``)."""

    value: str

    def __post_init__(self) -> None:
        """Validate hex color format."""
        if not HEX_COLOR_PATTERN.match(self.value):
            raise InvalidHexColorError(self.value)

    @classmethod
    def parse(cls, raw: str | None) -> Self | None:
        """Parse an optional hex color.

        Args:
            raw: Hex string or None.

        Returns:
            HexColor, or None when no value was given.
        """
        if raw is None:
            return None
        return cls(value=raw.strip())

    def __str__(self) -> str:
        return self.value
