"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with patch("src.core.supabase.get_supabase_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def mock_store() -> MagicMock:
    """Provide a mocked profile store with async methods."""
    from src.services.profile_store import ProfileStore

    return MagicMock(spec=ProfileStore)


@pytest.fixture
def client(mock_supabase_client: MagicMock, mock_store: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client whose routes use the mocked profile store.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.
        mock_store: Mocked profile store fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app
    from src.services.profile_store import get_profile_store

    app.dependency_overrides[get_profile_store] = lambda: mock_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
