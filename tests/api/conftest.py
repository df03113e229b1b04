"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.config import settings
from app.main import app

USER_ID = "user-123"


@pytest.fixture
def client(app_database) -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_client(app_database) -> TestClient:
    """Create test client with valid API key authentication."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.storefront_api_key}"},
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get authentication headers."""
    return {"Authorization": f"Bearer {settings.storefront_api_key}"}


@pytest.fixture
def user_client(app_database) -> TestClient:
    """Create authenticated test client acting for a shopper."""
    return TestClient(
        app,
        headers={
            "Authorization": f"Bearer {settings.storefront_api_key}",
            "X-User-ID": USER_ID,
        },
    )
