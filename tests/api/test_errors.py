"""Tests for domain error to HTTP status mapping."""

import pytest

from app.domain.exceptions import (
    CartItemNotFoundError,
    CartNotFoundError,
    DomainError,
    DuplicateSlugError,
    InvalidHexColorError,
    InvalidQuantityError,
    InvalidReferenceError,
    ProductNotFoundError,
)
from app.api.errors import domain_error_status


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (CartNotFoundError("u"), 404),
        (CartItemNotFoundError("c", "p"), 404),
        (ProductNotFoundError("p"), 404),
        (InvalidQuantityError(0), 422),
        (InvalidHexColorError("x"), 422),
        (InvalidReferenceError("category_id", "x"), 400),
        (DuplicateSlugError("Category", "slug", "shoes"), 409),
        (DomainError("other"), 400),
    ],
)
def test_domain_error_status(error: DomainError, status_code: int) -> None:
    """Each error family maps to its HTTP status."""
    assert domain_error_status(error) == status_code
