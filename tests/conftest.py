"""
Shared test fixtures for the HETS API test suite.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hets.config import Settings


@pytest.fixture
def test_settings():
    """Settings configured for testing (no real DB connection needed)."""
    return Settings(
        db_host="localhost",
        db_port=5432,
        db_name="hets_test",
        db_user="test",
        db_password="test",
        debug=True,
    )


@pytest.fixture
def mock_db_session():
    """Create a mock async database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def app_client(test_settings, mock_db_session):
    """Create a test client with mocked database dependencies."""
    with patch("hets.main.get_settings", return_value=test_settings):
        # Import after patching settings
        from hets.main import create_app

        app = create_app()

        from hets.database import get_db

        app.dependency_overrides[get_db] = lambda: mock_db_session

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

        app.dependency_overrides.clear()
